# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Gamma lookup tables for linear-light convolution."""

from typing import Optional

import cv2
import numpy as np

from smoothing_filter.configuration import IN_RANGE, GammaParams


class GammaLUT:
    """
    Forward and inverse gamma lookup tables.

    The forward table maps a gamma-encoded 8-bit value to a linear value in
    [0, out_range]; the inverse table maps a quantised linear accumulator
    back to 8 bits. The decode side does not subtract the Rec. 709 offset,
    so a round trip lifts dark values.
    """

    def __init__(self, params: Optional[GammaParams] = None):
        """
        Initialize and build both tables.

        Args:
            params: Table parameters (uses defaults if None)

        Raises:
            InvalidParameterError: If params cannot produce valid tables
        """
        self.params = (params or GammaParams()).validate()
        self.forward: Optional[np.ndarray] = None
        self.inverse: Optional[np.ndarray] = None
        self.build()

    @property
    def in_limit(self) -> int:
        return IN_RANGE - 1

    @property
    def out_limit(self) -> int:
        return self.params.out_range - 1

    def build(self) -> None:
        """Fill both tables. Later calls are no-ops."""
        if self.forward is not None and self.inverse is not None:
            return

        p = self.params
        i = np.arange(IN_RANGE, dtype=np.float64)
        forward = p.out_range * np.power(i / p.factor + p.offset, p.gamma)

        v = np.arange(p.out_range, dtype=np.float64)
        inverse = np.floor(IN_RANGE * np.power(v / p.out_range, 1.0 / p.gamma))

        self.forward = forward
        self.inverse = np.clip(inverse, 0, self.in_limit).astype(np.uint8)

    def to_linear(self, frame: np.ndarray) -> np.ndarray:
        """
        Convert an 8-bit frame to linear values.

        Args:
            frame: Frame (H, W, 3) uint8

        Returns:
            Linear frame (H, W, 3) float64
        """
        # cv2.LUT wants a 1x256 table and a contiguous uint8 source
        lut = self.forward.reshape(1, IN_RANGE)
        return cv2.LUT(np.ascontiguousarray(frame, dtype=np.uint8), lut)

    def to_gamma(self, acc: np.ndarray) -> np.ndarray:
        """
        Quantise linear accumulators and convert back to 8 bits.

        Args:
            acc: Linear values of any shape

        Returns:
            uint8 array of the same shape
        """
        idx = np.clip(np.rint(acc), 0, self.out_limit).astype(np.intp)
        return self.inverse[idx]

    def round_trip(self, values: np.ndarray) -> np.ndarray:
        """Encode then decode 8-bit values without any convolution."""
        values = np.clip(np.asarray(values), 0, self.in_limit).astype(np.intp)
        return self.to_gamma(self.forward[values])
