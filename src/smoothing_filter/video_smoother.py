# Copyright (c) 2026 smoothing_filter contributors
# SPDX-License-Identifier: MIT

"""Video and image smoothing pipeline."""

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple

import cv2
import numpy as np

from smoothing_filter.configuration import Configuration, SmoothingParams
from smoothing_filter.errors import MissingGeometryError
from smoothing_filter.result import FrameStatus, ProcessResult, SmoothingSummary
from smoothing_filter.smoothing_filter import SmoothingFilter


@dataclass
class VideoInfo:
    """Video metadata."""
    fps: float = 0.0
    frame_count: int = 0
    duration: float = 0.0
    frame_size: Tuple[int, int] = (0, 0)  # (width, height)


class VideoSmoother:
    """
    Runs every frame of a video or image through a SmoothingFilter.

    Plays the host pipeline around the filter: negotiates frame geometry,
    validates parameters, forwards smoothed frames to the output and
    reports degraded frames.
    """

    def __init__(self, config: Optional[Configuration] = None):
        """
        Initialize video smoother.

        Args:
            config: Configuration parameters (uses defaults if None)

        Raises:
            InvalidParameterError: If the configured kernel or gamma parameters
                are out of range
        """
        self.config = config or Configuration()
        params = self.config.get_smoothing_params().validate()
        gamma_params = self.config.get_gamma_params().validate()

        self.video_info = VideoInfo()
        self.filter = SmoothingFilter(
            kernelsize=params.kernelsize,
            sigma=params.sigma,
            gamma_params=gamma_params,
        )

        self._summary_json_path: str = ""

    def configure(self, kernelsize: int, sigma: float) -> None:
        """
        Change kernel parameters, possibly while a video is being smoothed.

        Raises:
            InvalidParameterError: If a value is out of range
        """
        params = SmoothingParams(kernelsize=kernelsize, sigma=sigma).validate()
        with self.filter.lock:
            self.filter.configure(params.kernelsize, params.sigma)
        print(f"Smoothing parameters: kernelsize {params.kernelsize} sigma {params.sigma}")

    def smooth_video(
        self,
        source_video: str,
        output_video: Optional[str] = None,
        output_json: bool = False,
        progress_callback: Optional[Callable[[float], None]] = None,
    ) -> SmoothingSummary:
        """
        Smooth a video file.

        Args:
            source_video: Path to video file
            output_video: Path of the smoothed video (defaults to results_path)
            output_json: If True, save a JSON summary next to the output
            progress_callback: Optional callback(progress: float) for updates

        Returns:
            SmoothingSummary with per-status frame counts
        """
        video = cv2.VideoCapture(source_video)

        if not self._video_is_open(source_video, video):
            video.release()
            raise RuntimeError(f"Could not open video: {source_video}")

        writer = None
        try:
            width, height = self.video_info.frame_size
            self._negotiate(width, height)

            output_path = self._output_path(source_video, output_video)
            fourcc = cv2.VideoWriter_fourcc(*self.config.fourcc)
            fps = self.video_info.fps if self.video_info.fps > 0 else 25.0
            writer = cv2.VideoWriter(output_path, fourcc, fps, (width, height))
            if not writer.isOpened():
                raise RuntimeError(f"Could not open video writer: {output_path}")

            summary = self._new_summary(source_video, output_path)
            last_percentage = 0

            print("Video smoothing started")
            start_time = time.time()

            ret, frame = video.read()
            while ret and frame is not None:
                result = self._process(frame, summary.total_frames)
                summary.add(result)
                writer.write(frame)

                if self.video_info.frame_count > 0:
                    progress = summary.total_frames / self.video_info.frame_count * 100
                    if progress_callback:
                        progress_callback(progress)

                    if int(progress) % 10 == 0 and int(progress) != last_percentage:
                        last_percentage = int(progress)
                        print(f"Smoothed {last_percentage}%")

                ret, frame = video.read()

            summary.processing_time = int((time.time() - start_time) * 1000)
            print("Video smoothing ended")
            print(f"Elapsed time: {summary.processing_time} ms")

            self._finish(summary, output_json)
            return summary

        finally:
            if writer is not None:
                writer.release()
            video.release()

    def smooth_image(
        self,
        source_image: str,
        output_image: Optional[str] = None,
        output_json: bool = False,
    ) -> SmoothingSummary:
        """
        Smooth a single image file.

        Args:
            source_image: Path to image file
            output_image: Path of the smoothed image (defaults to results_path)
            output_json: If True, save a JSON summary next to the output

        Returns:
            SmoothingSummary for the single frame
        """
        frame = cv2.imread(source_image, cv2.IMREAD_COLOR)
        if frame is None:
            print(f"Error: Image {source_image} could not be opened")
            raise RuntimeError(f"Could not open image: {source_image}")

        height, width = frame.shape[:2]
        print(f"Image: {source_image} resolution {width}x{height}")
        self._negotiate(width, height)

        output_path = self._output_path(source_image, output_image)
        summary = self._new_summary(source_image, output_path)

        start_time = time.time()
        summary.add(self._process(frame, 0))
        summary.processing_time = int((time.time() - start_time) * 1000)

        if not cv2.imwrite(output_path, frame):
            raise RuntimeError(f"Could not write image: {output_path}")

        self._finish(summary, output_json)
        return summary

    def _negotiate(self, width: int, height: int) -> None:
        """Pass the stream's frame size to the filter."""
        try:
            geometry = self.filter.set_frame_geometry(width, height)
        except MissingGeometryError:
            print("Error: No width/height available")
            raise
        print(
            f"Frame geometry: {geometry.width}x{geometry.height}, "
            f"stride {geometry.stride}"
        )
        print(
            f"Smoothing parameters: kernelsize {self.filter.kernelsize} "
            f"sigma {self.filter.sigma}"
        )

    def _process(self, frame: np.ndarray, frame_index: int) -> ProcessResult:
        """Smooth one frame in place and report degraded results."""
        with self.filter.lock:
            result = self.filter.process_frame(frame)

        if not result.success:
            print(f"Warning: frame {frame_index}: {result.message}")
        return result

    def _output_path(self, source: str, output: Optional[str]) -> str:
        if output:
            path = Path(output)
        else:
            path = Path(self.config.results_path) / f"smoothed_{Path(source).name}"
        path.parent.mkdir(parents=True, exist_ok=True)

        self._summary_json_path = str(path.with_suffix(".json"))
        return str(path)

    def _new_summary(self, source: str, output: str) -> SmoothingSummary:
        geometry = self.filter.geometry
        summary = SmoothingSummary(
            source=source,
            output=output,
            width=geometry.width,
            height=geometry.height,
        )
        self._record_params(summary)
        return summary

    def _record_params(self, summary: SmoothingSummary) -> None:
        """Copy the filter's current kernel parameters into the summary."""
        with self.filter.lock:
            summary.kernelsize = self.filter.kernelsize
            summary.sigma = self.filter.sigma

    def _finish(self, summary: SmoothingSummary, output_json: bool) -> None:
        # configure() may have run mid-stream; report what the last frame used
        self._record_params(summary)
        counts = summary.frame_counts
        print(f"Frames smoothed: {counts[FrameStatus.Smoothed]}")
        print(f"Frames passed through: {counts[FrameStatus.PassThrough]}")
        if summary.degraded_frames:
            print(f"Warning: {summary.degraded_frames} frames used a stale or no kernel")
        print(f"Output written to {summary.output}")

        if output_json or self.config.write_json:
            with open(self._summary_json_path, "w") as f:
                json.dump(summary.to_dict(), f, indent=2)
            print(f"Summary Json written to {self._summary_json_path}")

    def _video_is_open(self, source_video: str, video: cv2.VideoCapture) -> bool:
        """Check if video is open and get metadata."""
        if not video.isOpened():
            print(f"Error: Video {source_video} could not be opened")
            return False

        self.video_info.fps = video.get(cv2.CAP_PROP_FPS)
        self.video_info.frame_count = int(video.get(cv2.CAP_PROP_FRAME_COUNT))
        self.video_info.frame_size = (
            int(video.get(cv2.CAP_PROP_FRAME_WIDTH)),
            int(video.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        )
        self.video_info.duration = (
            self.video_info.frame_count / self.video_info.fps
            if self.video_info.fps > 0
            else 0
        )

        print(f"Video: {source_video} opened successfully")
        print(f"Video FPS: {self.video_info.fps}")
        print(f"Total frames: {self.video_info.frame_count}")
        print(f"Video resolution: {self.video_info.frame_size[0]}x{self.video_info.frame_size[1]}")
        print(f"Duration: {self.video_info.duration:.2f}s")

        return True

    @property
    def summary_json_path(self) -> str:
        """Get summary JSON file path."""
        return self._summary_json_path
