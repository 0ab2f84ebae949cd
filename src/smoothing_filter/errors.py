# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Exceptions raised by the smoothing filter."""


class SmoothingError(RuntimeError):
    """Base class for smoothing filter errors."""


class MissingGeometryError(SmoothingError):
    """Frame width/height is unset, zero or could not be determined."""


class KernelAllocationError(SmoothingError):
    """Storage for the convolution kernel could not be obtained."""


class InvalidParameterError(SmoothingError, ValueError):
    """A smoothing parameter is outside its allowed range."""


class FrameBufferError(SmoothingError, ValueError):
    """Pixel buffer is read-only or does not match the frame geometry."""
