#!/usr/bin/env python3
"""Example with progress callback and a parameter change mid-stream."""

import sys
import threading

from smoothing_filter import Configuration, VideoSmoother


def progress_callback(progress: float) -> None:
    """Print progress bar."""
    bar_length = 40
    filled = int(bar_length * progress / 100)
    bar = "=" * filled + "-" * (bar_length - filled)
    sys.stdout.write(f"\rProgress: [{bar}] {progress:.1f}%")
    sys.stdout.flush()
    if progress >= 100:
        print()


def main():
    # Load appsettings.json from the current directory, if present
    config = Configuration.from_json(".")

    # Precision of the reverse lookup (default 12 bit)
    config.out_range = 1 << 14

    config.results_path = "my_results/"
    smoother = VideoSmoother(config)

    # A control thread may retune the kernel while frames are streaming
    timer = threading.Timer(2.0, smoother.configure, args=(2, 3.0))
    timer.start()

    try:
        summary = smoother.smooth_video(
            source_video="your_video.mp4",
            output_json=True,
            progress_callback=progress_callback,
        )
    finally:
        timer.cancel()

    print(f"\nSuccess: {summary.success}")
    print(f"Output file: {summary.output}")


if __name__ == "__main__":
    main()
