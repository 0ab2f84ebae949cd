# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Smoothing filter combining lookup tables, kernel cache and engine."""

import threading
from typing import Optional

from smoothing_filter.configuration import (
    DEFAULT_KERNELSIZE,
    DEFAULT_SIGMA,
    GammaParams,
)
from smoothing_filter.convolution_engine import ConvolutionEngine
from smoothing_filter.filter_state import FilterState, FrameGeometry
from smoothing_filter.gamma_lut import GammaLUT
from smoothing_filter.kernel_cache import KernelCache
from smoothing_filter.result import ProcessResult


class SmoothingFilter:
    """
    Gaussian smoothing of interleaved 3-channel 8-bit frames in linear light.

    configure() and process_frame() share one FilterState. When they are
    called from different threads, hold ``lock`` around each call.
    """

    def __init__(
        self,
        kernelsize: int = DEFAULT_KERNELSIZE,
        sigma: float = DEFAULT_SIGMA,
        gamma_params: Optional[GammaParams] = None,
    ):
        """
        Initialize the filter.

        Args:
            kernelsize: Size index n, the kernel is (2n+1) x (2n+1)
            sigma: Gaussian sigma
            gamma_params: Lookup table parameters (uses defaults if None)
        """
        self.state = FilterState(kernelsize=kernelsize, sigma=float(sigma))
        self.lut = GammaLUT(gamma_params)
        self.kernel_cache = KernelCache(self.state)
        self.engine = ConvolutionEngine(self.state, self.lut, self.kernel_cache)
        self.lock = threading.Lock()

    @property
    def kernelsize(self) -> int:
        return self.state.kernelsize

    @property
    def sigma(self) -> float:
        return self.state.sigma

    @property
    def geometry(self) -> Optional[FrameGeometry]:
        return self.state.geometry

    def configure(self, kernelsize: int, sigma: float) -> None:
        """Update kernel parameters; the kernel is rebuilt on the next frame."""
        self.kernel_cache.configure(kernelsize, sigma)

    def set_frame_geometry(
        self,
        width: int,
        height: int,
        stride: Optional[int] = None,
    ) -> FrameGeometry:
        """
        Set the negotiated frame size.

        Args:
            width: Frame width in pixels
            height: Frame height in pixels
            stride: Bytes per row (defaults to 3 * width)

        Returns:
            The validated geometry

        Raises:
            MissingGeometryError: If width or height is not positive
        """
        # A failed negotiation leaves no geometry, so no frame is convolved
        self.state.geometry = None
        if stride is None:
            geometry = FrameGeometry.from_size(width, height)
        else:
            geometry = FrameGeometry(width=width, height=height, stride=stride)
        self.state.geometry = geometry.validate()
        return geometry

    def process_frame(self, buffer) -> ProcessResult:
        """Smooth a frame buffer in place."""
        return self.engine.process_frame(buffer)
