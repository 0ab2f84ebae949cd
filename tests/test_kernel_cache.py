# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Tests for KernelCache class."""

import numpy as np
import pytest

from smoothing_filter.errors import KernelAllocationError
from smoothing_filter.filter_state import FilterState
from smoothing_filter.kernel_cache import KernelCache


def failing_allocate(side):
    raise MemoryError


class TestKernelCache:
    """Test KernelCache class."""

    @pytest.fixture
    def cache(self):
        """Create a cache with default parameters."""
        return KernelCache(FilterState())

    def test_initial_state(self, cache):
        """Test cache starts dirty with no kernel."""
        assert cache.is_dirty
        assert cache.last_kernel is None
        assert cache.recompute_count == 0

    @pytest.mark.parametrize("kernelsize", [0, 1, 2])
    @pytest.mark.parametrize("sigma", [0.1, 0.5, 1.5, 10.0, 100.0])
    def test_kernel_normalised(self, cache, kernelsize, sigma):
        """Test kernel weights sum to 1 for all valid parameters."""
        cache.configure(kernelsize, sigma)
        kernel = cache.kernel()

        assert kernel.shape == (2 * kernelsize + 1, 2 * kernelsize + 1)
        assert kernel.dtype == np.float32
        assert abs(float(kernel.sum(dtype=np.float64)) - 1.0) <= 1e-6

    def test_kernel_weights(self, cache):
        """Test 3x3 weights follow exp(-r^2 / sigma^2)."""
        kernel = cache.kernel()

        corner = np.exp(-2 / 2.25)
        edge = np.exp(-1 / 2.25)
        total = 1 + 4 * edge + 4 * corner
        assert np.isclose(kernel[1, 1], 1 / total, rtol=1e-6)
        assert np.isclose(kernel[0, 1], edge / total, rtol=1e-6)
        assert np.isclose(kernel[2, 2], corner / total, rtol=1e-6)

    def test_kernel_symmetric(self, cache):
        """Test kernel is symmetric with its peak in the centre."""
        cache.configure(2, 1.5)
        kernel = cache.kernel()

        assert np.array_equal(kernel, kernel.T)
        assert np.array_equal(kernel, kernel[::-1, ::-1])
        assert kernel.argmax() == 12

    def test_kernelsize_zero(self, cache):
        """Test degenerate 1x1 kernel."""
        cache.configure(0, 1.5)
        assert np.array_equal(cache.kernel(), np.ones((1, 1), dtype=np.float32))

    def test_small_sigma(self, cache):
        """Test sigma 0.1 concentrates all weight in the centre."""
        cache.configure(1, 0.1)
        kernel = cache.kernel()

        assert np.isclose(kernel[1, 1], 1.0)
        off_centre = np.delete(kernel.ravel(), 4)
        assert np.all(off_centre < 1e-6)

    def test_large_sigma(self, cache):
        """Test sigma 100 gives an almost flat 5x5 kernel."""
        cache.configure(2, 100.0)
        kernel = cache.kernel()

        assert np.allclose(kernel, 1 / 25, atol=1e-3)


class TestDirtyFlag:
    """Test lazy recomputation."""

    @pytest.fixture
    def cache(self):
        return KernelCache(FilterState())

    def test_configure_does_not_recompute(self, cache):
        """Test configure only marks the kernel dirty."""
        cache.kernel()
        cache.configure(2, 3.0)

        assert cache.is_dirty
        assert cache.recompute_count == 1
        assert cache.last_kernel.shape == (3, 3)

    def test_recompute_on_first_use(self, cache):
        """Test kernel is rebuilt on first use after becoming dirty."""
        cache.kernel()
        cache.configure(2, 3.0)
        kernel = cache.kernel()

        assert not cache.is_dirty
        assert cache.recompute_count == 2
        assert kernel.shape == (5, 5)

    def test_identical_values_do_not_recompute(self, cache):
        """Test configuring the same values twice keeps the kernel."""
        cache.configure(2, 0.8)
        first = cache.kernel()
        cache.configure(2, 0.8)
        cache.configure(2, 0.8)
        second = cache.kernel()

        assert cache.recompute_count == 1
        assert second is first

    def test_cached_kernel_reused(self, cache):
        """Test repeated kernel() calls do not rebuild."""
        for _ in range(5):
            cache.kernel()
        assert cache.recompute_count == 1

    def test_sigma_change_marks_dirty(self, cache):
        """Test changing only sigma marks the kernel dirty."""
        cache.kernel()
        cache.configure(1, 2.0)
        assert cache.is_dirty

    def test_state_shared(self):
        """Test the cache writes through to the shared state."""
        state = FilterState()
        cache = KernelCache(state)
        cache.configure(2, 4.0)
        cache.kernel()

        assert state.kernelsize == 2
        assert state.sigma == 4.0
        assert state.kernel is cache.last_kernel
        assert state.dirty is False


class TestAllocationFailure:
    """Test kernel allocation failures."""

    def test_failure_without_previous_kernel(self, monkeypatch):
        """Test failure before any kernel was built."""
        cache = KernelCache(FilterState())
        monkeypatch.setattr(cache, "_allocate", failing_allocate)

        with pytest.raises(KernelAllocationError):
            cache.kernel()
        assert cache.last_kernel is None
        assert cache.is_dirty
        assert cache.recompute_count == 0

    def test_failure_keeps_previous_kernel(self, monkeypatch):
        """Test failure leaves previous kernel and dirty flag in place."""
        cache = KernelCache(FilterState())
        previous = cache.kernel()
        cache.configure(2, 1.5)
        monkeypatch.setattr(cache, "_allocate", failing_allocate)

        with pytest.raises(KernelAllocationError):
            cache.kernel()
        assert cache.last_kernel is previous
        assert cache.is_dirty

    def test_recovers_after_failure(self, monkeypatch):
        """Test next successful build clears the dirty flag."""
        cache = KernelCache(FilterState())
        monkeypatch.setattr(cache, "_allocate", failing_allocate)
        with pytest.raises(KernelAllocationError):
            cache.kernel()

        monkeypatch.undo()
        assert cache.kernel().shape == (3, 3)
        assert not cache.is_dirty
