#!/usr/bin/env python3
"""Basic usage example for smoothing_filter."""

import numpy as np

from smoothing_filter import Configuration, FrameStatus, SmoothingFilter, VideoSmoother


def main():
    # Smooth a raw BGR buffer directly
    smoothing = SmoothingFilter(kernelsize=1, sigma=1.5)
    smoothing.set_frame_geometry(width=640, height=480)

    frame = np.zeros((480, 640, 3), dtype=np.uint8)
    frame[200:280, 280:360] = 255
    buffer = bytearray(frame.tobytes())

    result = smoothing.process_frame(buffer)
    print(f"Frame status: {result.status.name} ({result.kernel_side}x{result.kernel_side} kernel)")

    # Or smooth a whole video file
    config = Configuration(kernelsize=2, sigma=2.0)
    smoother = VideoSmoother(config)

    summary = smoother.smooth_video(
        source_video="your_video.mp4",
        output_video="your_video_smoothed.mp4",
        output_json=True,
    )

    if summary.success:
        print("All frames smoothed")
    else:
        print(f"{summary.degraded_frames} frames were not fully smoothed")

    print(f"\nTotal frames: {summary.total_frames}")
    print(f"Smoothed: {summary.frame_counts[FrameStatus.Smoothed]}")
    print(f"Processing time: {summary.processing_time} ms")


if __name__ == "__main__":
    main()
