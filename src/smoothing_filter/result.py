# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Result types and enums for smoothing."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict


class FrameStatus(IntEnum):
    """Outcome of processing a single frame."""
    Smoothed = 0
    PassThrough = 1
    StaleKernel = 2
    Unmodified = 3


@dataclass
class ProcessResult:
    """Result of processing one frame buffer."""
    status: FrameStatus = FrameStatus.Smoothed
    kernel_side: int = 0
    message: str = ""

    @property
    def success(self) -> bool:
        return self.status in (FrameStatus.Smoothed, FrameStatus.PassThrough)

    def to_dict(self) -> dict:
        return {
            "Status": self.status.name,
            "KernelSide": self.kernel_side,
            "Message": self.message,
        }


@dataclass
class SmoothingSummary:
    """Overall result of smoothing a stream of frames."""
    source: str = ""
    output: str = ""
    kernelsize: int = 0
    sigma: float = 0.0
    width: int = 0
    height: int = 0
    processing_time: int = 0  # milliseconds
    frame_counts: Dict[FrameStatus, int] = field(
        default_factory=lambda: {status: 0 for status in FrameStatus}
    )

    def add(self, result: ProcessResult) -> None:
        """Count a processed frame."""
        self.frame_counts[result.status] += 1

    @property
    def total_frames(self) -> int:
        return sum(self.frame_counts.values())

    @property
    def degraded_frames(self) -> int:
        return (
            self.frame_counts[FrameStatus.StaleKernel]
            + self.frame_counts[FrameStatus.Unmodified]
        )

    @property
    def success(self) -> bool:
        return self.degraded_frames == 0

    def to_dict(self) -> dict:
        return {
            "Source": self.source,
            "Output": self.output,
            "KernelSize": self.kernelsize,
            "Sigma": self.sigma,
            "Width": self.width,
            "Height": self.height,
            "ProcessingTime": self.processing_time,
            "TotalFrames": self.total_frames,
            "DegradedFrames": self.degraded_frames,
            "FrameCounts": {s.name: n for s, n in self.frame_counts.items()},
            "Success": self.success,
        }
