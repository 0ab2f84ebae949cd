# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Gamma-corrected convolution of interleaved 8-bit frames."""

import numpy as np

from smoothing_filter.errors import KernelAllocationError, MissingGeometryError
from smoothing_filter.filter_state import FilterState
from smoothing_filter.gamma_lut import GammaLUT
from smoothing_filter.kernel_cache import KernelCache
from smoothing_filter.result import FrameStatus, ProcessResult


def convolve_generic(linear: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Apply a square kernel anchored at the top-left of each output pixel.

    Output (y, x) = sum over i, j of linear[y + i, x + j] * kernel[i, j]
    for y < H - s and x < W - s.

    Args:
        linear: Linear frame (H, W, 3) float64
        kernel: Square kernel (s, s)

    Returns:
        Accumulators (H - s, W - s, 3) float64
    """
    s = kernel.shape[0]
    rows = linear.shape[0] - s
    cols = linear.shape[1] - s
    weights = kernel.astype(np.float64)

    acc = np.zeros((rows, cols, linear.shape[2]), dtype=np.float64)
    for i in range(s):
        for j in range(s):
            acc += linear[i:i + rows, j:j + cols] * weights[i, j]
    return acc


def convolve_3x3(linear: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Unrolled 3x3 version of convolve_generic.

    Taps are summed in the same row-major order as the generic loop so the
    two produce identical accumulators.
    """
    rows = linear.shape[0] - 3
    cols = linear.shape[1] - 3
    k = kernel.astype(np.float64).ravel()

    r0 = linear[0:rows]
    r1 = linear[1:rows + 1]
    r2 = linear[2:rows + 2]

    acc = r0[:, 0:cols] * k[0]
    acc += r0[:, 1:cols + 1] * k[1]
    acc += r0[:, 2:cols + 2] * k[2]
    acc += r1[:, 0:cols] * k[3]
    acc += r1[:, 1:cols + 1] * k[4]
    acc += r1[:, 2:cols + 2] * k[5]
    acc += r2[:, 0:cols] * k[6]
    acc += r2[:, 1:cols + 1] * k[7]
    acc += r2[:, 2:cols + 2] * k[8]
    return acc


class ConvolutionEngine:
    """
    Blurs frames in linear light using the cached kernel.

    Every output pixel is computed from the original input values; rows and
    columns too close to the bottom/right edge for a full kernel footprint
    are left untouched.
    """

    def __init__(self, state: FilterState, lut: GammaLUT, cache: KernelCache):
        """
        Initialize the engine.

        Args:
            state: Filter state shared with the kernel cache
            lut: Built gamma lookup tables
            cache: Kernel cache bound to the same state
        """
        self.state = state
        self.lut = lut
        self.cache = cache
        self.use_fast_path = True

    def process_frame(self, buffer) -> ProcessResult:
        """
        Smooth a frame buffer in place.

        Args:
            buffer: Writable buffer of at least stride * height bytes

        Returns:
            ProcessResult describing what was done to the buffer

        Raises:
            MissingGeometryError: If no frame geometry has been set
            FrameBufferError: If the buffer is read-only or too short
        """
        geometry = self.state.geometry
        if geometry is None:
            raise MissingGeometryError("Frame geometry has not been negotiated")

        frame = geometry.frame_view(buffer)

        if self.state.kernelsize == 0:
            return ProcessResult(FrameStatus.PassThrough, 1, "kernelsize is 0")

        status = FrameStatus.Smoothed
        message = ""
        try:
            kernel = self.cache.kernel()
        except KernelAllocationError as e:
            kernel = self.cache.last_kernel
            if kernel is None:
                return ProcessResult(
                    FrameStatus.Unmodified, 0, f"{e}, frame forwarded unmodified"
                )
            status = FrameStatus.StaleKernel
            message = f"{e}, using previous {kernel.shape[0]}x{kernel.shape[0]} kernel"

        s = kernel.shape[0]
        if geometry.height <= s or geometry.width <= s:
            return ProcessResult(
                FrameStatus.PassThrough, s, f"frame smaller than {s}x{s} kernel"
            )

        linear = self.lut.to_linear(frame)
        if s == 3 and self.use_fast_path:
            acc = convolve_3x3(linear, kernel)
        else:
            acc = convolve_generic(linear, kernel)

        rows, cols = acc.shape[:2]
        frame[:rows, :cols] = self.lut.to_gamma(acc)

        return ProcessResult(status, s, message)
