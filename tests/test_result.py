# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Tests for Result types and enums."""

import pytest

from smoothing_filter.result import FrameStatus, ProcessResult, SmoothingSummary


class TestFrameStatus:
    """Test FrameStatus enum."""

    def test_values(self):
        """Test enum values."""
        assert FrameStatus.Smoothed == 0
        assert FrameStatus.PassThrough == 1
        assert FrameStatus.StaleKernel == 2
        assert FrameStatus.Unmodified == 3


class TestProcessResult:
    """Test ProcessResult class."""

    @pytest.mark.parametrize("status,success", [
        (FrameStatus.Smoothed, True),
        (FrameStatus.PassThrough, True),
        (FrameStatus.StaleKernel, False),
        (FrameStatus.Unmodified, False),
    ])
    def test_success(self, status, success):
        """Test which statuses count as success."""
        assert ProcessResult(status).success is success

    def test_to_dict(self):
        """Test to_dict method."""
        d = ProcessResult(FrameStatus.StaleKernel, 3, "allocation failed").to_dict()

        assert d["Status"] == "StaleKernel"
        assert d["KernelSide"] == 3
        assert d["Message"] == "allocation failed"


class TestSmoothingSummary:
    """Test SmoothingSummary class."""

    def test_default_values(self):
        """Test default values."""
        summary = SmoothingSummary()
        assert summary.total_frames == 0
        assert summary.degraded_frames == 0
        assert summary.success
        assert set(summary.frame_counts) == set(FrameStatus)

    def test_add(self):
        """Test counting frames by status."""
        summary = SmoothingSummary()
        for status in [FrameStatus.Smoothed] * 3 + [FrameStatus.StaleKernel, FrameStatus.Unmodified]:
            summary.add(ProcessResult(status))

        assert summary.total_frames == 5
        assert summary.frame_counts[FrameStatus.Smoothed] == 3
        assert summary.degraded_frames == 2
        assert not summary.success

    def test_to_dict(self):
        """Test to_dict method."""
        summary = SmoothingSummary(
            source="in.mp4",
            output="out.mp4",
            kernelsize=2,
            sigma=1.5,
            width=640,
            height=480,
            processing_time=1200,
        )
        summary.add(ProcessResult(FrameStatus.Smoothed))
        d = summary.to_dict()

        assert d["Source"] == "in.mp4"
        assert d["KernelSize"] == 2
        assert d["Width"] == 640
        assert d["ProcessingTime"] == 1200
        assert d["TotalFrames"] == 1
        assert d["FrameCounts"]["Smoothed"] == 1
        assert d["FrameCounts"]["Unmodified"] == 0
        assert d["Success"] is True
