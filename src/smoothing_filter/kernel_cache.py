# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Lazily rebuilt Gaussian kernel."""

from typing import Optional

import numpy as np

from smoothing_filter.errors import KernelAllocationError
from smoothing_filter.filter_state import FilterState


class KernelCache:
    """
    Normalised square Gaussian kernel for the current parameters.

    configure() only marks the kernel dirty; the kernel is rebuilt on the
    next call to kernel().
    """

    def __init__(self, state: FilterState):
        """
        Initialize the cache.

        Args:
            state: Filter state shared with the convolution engine
        """
        self.state = state
        self.recompute_count: int = 0

    @property
    def is_dirty(self) -> bool:
        return self.state.dirty

    @property
    def last_kernel(self) -> Optional[np.ndarray]:
        """Most recently built kernel, whatever the current parameters."""
        return self.state.kernel

    def configure(self, kernelsize: int, sigma: float) -> None:
        """
        Store new parameters, marking the kernel dirty if either changed.

        Args:
            kernelsize: Size index n, the kernel is (2n+1) x (2n+1)
            sigma: Gaussian sigma, weight = exp(-r^2 / sigma^2)
        """
        sigma = float(sigma)
        if self.state.kernelsize != kernelsize:
            self.state.kernelsize = kernelsize
            self.state.dirty = True
        if self.state.sigma != sigma:
            self.state.sigma = sigma
            self.state.dirty = True

    def kernel(self) -> np.ndarray:
        """
        Get the kernel, rebuilding it first if parameters changed.

        Returns:
            float32 array (s, s) summing to 1

        Raises:
            KernelAllocationError: If storage for the new kernel could not be
                obtained; the previous kernel and dirty flag are kept
        """
        if self.state.dirty or self.state.kernel is None:
            self._recompute()
        return self.state.kernel

    def _allocate(self, side: int) -> np.ndarray:
        return np.empty((side, side), dtype=np.float32)

    def _recompute(self) -> None:
        n = self.state.kernelsize
        side = 2 * n + 1
        try:
            kernel = self._allocate(side)
        except MemoryError as e:
            raise KernelAllocationError(
                f"Could not allocate {side}x{side} kernel"
            ) from e

        offsets = np.arange(side, dtype=np.float64) - n
        ii, jj = np.meshgrid(offsets, offsets, indexing="ij")
        weights = np.exp(-(ii * ii + jj * jj) / (self.state.sigma * self.state.sigma))

        # Normalise so brightness is preserved
        kernel[:] = weights / weights.sum()

        self.state.kernel = kernel
        self.state.dirty = False
        self.recompute_count += 1
