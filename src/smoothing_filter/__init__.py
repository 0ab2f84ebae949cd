# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""
smoothing_filter: Gaussian smoothing of camera frames in linear light.

Frames from cameras that apply a ~0.45 gamma are linearised through a
lookup table, convolved with a normalised Gaussian kernel and re-encoded
back to 8 bits.
"""

from smoothing_filter.configuration import Configuration, GammaParams, SmoothingParams
from smoothing_filter.errors import (
    FrameBufferError,
    InvalidParameterError,
    KernelAllocationError,
    MissingGeometryError,
    SmoothingError,
)
from smoothing_filter.result import FrameStatus, ProcessResult, SmoothingSummary
from smoothing_filter.smoothing_filter import SmoothingFilter
from smoothing_filter.video_smoother import VideoSmoother

__version__ = "1.0.0"
__all__ = [
    "SmoothingFilter",
    "VideoSmoother",
    "Configuration",
    "GammaParams",
    "SmoothingParams",
    "FrameStatus",
    "ProcessResult",
    "SmoothingSummary",
    "SmoothingError",
    "MissingGeometryError",
    "KernelAllocationError",
    "InvalidParameterError",
    "FrameBufferError",
]
