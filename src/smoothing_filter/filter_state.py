# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Frame geometry and shared filter state."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from smoothing_filter.configuration import DEFAULT_KERNELSIZE, DEFAULT_SIGMA
from smoothing_filter.errors import FrameBufferError, MissingGeometryError

CHANNELS = 3


@dataclass(frozen=True)
class FrameGeometry:
    """Negotiated frame size of an interleaved 3-channel 8-bit stream."""
    width: int
    height: int
    stride: int  # bytes to next row

    @classmethod
    def from_size(cls, width: int, height: int) -> "FrameGeometry":
        """Create geometry for rows without padding."""
        return cls(width=width, height=height, stride=CHANNELS * width)

    @property
    def pitch(self) -> int:
        """Pixels to next row."""
        return self.stride // CHANNELS

    @property
    def frame_bytes(self) -> int:
        return self.stride * self.height

    def validate(self) -> "FrameGeometry":
        """
        Reject geometry that cannot describe a frame.

        Raises:
            MissingGeometryError: If width or height is zero or negative
            FrameBufferError: If stride is too short or not pixel aligned
        """
        if self.width <= 0 or self.height <= 0:
            raise MissingGeometryError(
                f"No usable frame size: {self.width}x{self.height}"
            )
        if self.stride < CHANNELS * self.width or self.stride % CHANNELS:
            raise FrameBufferError(
                f"Stride {self.stride} does not fit {self.width} pixels of "
                f"{CHANNELS} bytes"
            )
        return self

    def frame_view(self, buffer) -> np.ndarray:
        """
        View a writable buffer as a (height, width, 3) uint8 frame.

        Args:
            buffer: bytearray, memoryview or uint8 ndarray of at least
                stride * height bytes

        Returns:
            Array sharing memory with the buffer
        """
        if isinstance(buffer, np.ndarray):
            if buffer.dtype != np.uint8:
                raise FrameBufferError(f"Expected uint8 pixels, got {buffer.dtype}")
            if not buffer.flags.c_contiguous:
                raise FrameBufferError("Frame array must be C-contiguous")
            flat = buffer.reshape(-1)
        else:
            flat = np.frombuffer(buffer, dtype=np.uint8)

        if not flat.flags.writeable:
            raise FrameBufferError("Frame buffer is read-only")
        if flat.size < self.frame_bytes:
            raise FrameBufferError(
                f"Frame buffer holds {flat.size} bytes, need {self.frame_bytes}"
            )

        rows = flat[:self.frame_bytes].reshape(self.height, self.stride)
        return rows[:, :CHANNELS * self.width].reshape(self.height, self.width, CHANNELS)


@dataclass
class FilterState:
    """
    State shared by parameter updates and frame processing.

    The same instance is handed to KernelCache and ConvolutionEngine; callers
    must not run configure and process_frame concurrently on it.
    """
    kernelsize: int = DEFAULT_KERNELSIZE
    sigma: float = DEFAULT_SIGMA
    dirty: bool = True
    kernel: Optional[np.ndarray] = None
    geometry: Optional[FrameGeometry] = None
