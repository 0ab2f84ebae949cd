# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Command-line interface for gamma-corrected smoothing."""

import argparse
import sys
from pathlib import Path

from smoothing_filter.configuration import Configuration
from smoothing_filter.errors import InvalidParameterError
from smoothing_filter.video_smoother import VideoSmoother

IMAGE_SUFFIXES = {".png", ".bmp", ".jpg", ".jpeg", ".tif", ".tiff", ".ppm"}


def main(argv=None):
    """Main entry point for the smoothing CLI."""
    parser = argparse.ArgumentParser(
        prog="smoothing-filter",
        description="Gaussian smoothing of 8-bit camera frames in linear light",
    )

    parser.add_argument(
        "input",
        help="Path to image or video file to smooth",
    )

    parser.add_argument(
        "-o", "--output",
        help="Output file (default: <results path>/smoothed_<input name>)",
        default=None,
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to directory containing appsettings.json",
        default=".",
    )

    parser.add_argument(
        "-k", "--kernelsize",
        type=int,
        help="Kernel size index n, the kernel is (2n+1) x (2n+1) (0-2)",
        default=None,
    )

    parser.add_argument(
        "-s", "--sigma",
        type=float,
        help="Gaussian sigma (0.1-100)",
        default=None,
    )

    parser.add_argument(
        "-j", "--json",
        action="store_true",
        help="Write a JSON summary next to the output",
    )

    args = parser.parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {args.input}")
        sys.exit(1)

    config = Configuration.from_json(args.config)

    # Override config with CLI arguments
    if args.kernelsize is not None:
        config.kernelsize = args.kernelsize
    if args.sigma is not None:
        config.sigma = args.sigma

    try:
        smoother = VideoSmoother(config)
    except InvalidParameterError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        if input_path.suffix.lower() in IMAGE_SUFFIXES:
            summary = smoother.smooth_image(
                str(input_path), args.output, output_json=args.json
            )
        else:
            summary = smoother.smooth_video(
                str(input_path), args.output, output_json=args.json
            )
    except Exception as e:
        print(f"Error during smoothing: {e}")
        sys.exit(3)

    print("\n" + "=" * 50)
    print("SMOOTHING SUMMARY")
    print("=" * 50)
    print(f"Kernel: {2 * summary.kernelsize + 1}x{2 * summary.kernelsize + 1}, sigma {summary.sigma}")
    print(f"Total Frames: {summary.total_frames}")
    print(f"Processing Time: {summary.processing_time} ms")
    print(f"Output: {summary.output}")
    if args.json:
        print(f"Summary JSON: {smoother.summary_json_path}")

    sys.exit(0 if summary.success else 2)


if __name__ == "__main__":
    main()
