"""
Provides the service that converts one video file into an MP3 with cover art.

A conversion is two FFmpeg invocations run in order:

1. Extract one frame of the video as a JPEG into the scratch directory.
2. Encode the video's audio track as MP3 and embed that JPEG as front cover.

The JPEG only lives between the two steps. It is removed whether the
conversion succeeds or fails at either step. The MP3 is written under a
temporary name next to its final path and only renamed once FFmpeg succeeds,
so a failed conversion never replaces or deletes an existing MP3.
"""

import os
from pathlib import Path

from loguru import logger

from ..config.video import DEFAULT_SCREENSHOT_TIME
from ..domain.exceptions import (
    AudioMuxException,
    ConversionException,
    CoverExtractionException,
)
from ..domain.media import VideoFile
from ..utils.ffmpeg_utils import build_cover_cmd, build_mux_cmd, last_stderr_line, run_cmd
from ..utils.format_utils import formatted_size


class Mp3Converter:
    """
    Converts `VideoFile` work items to MP3 files.

    One instance is shared by all workers; it holds no per-file state, so
    `convert()` may run concurrently for different files.

    Attributes:
        input_dir (Path): Root the work items are relative to.
        output_dir (Path): Root of the mirrored output tree.
        temp_dir (Path): Scratch directory for the transient cover images.
        screenshot_time (float): Timestamp (seconds) of the cover frame.
        ffmpeg_path (str): FFmpeg command or absolute path.
    """

    def __init__(
        self,
        input_dir: Path,
        output_dir: Path,
        temp_dir: Path,
        screenshot_time: float = DEFAULT_SCREENSHOT_TIME,
        ffmpeg_path: str = "ffmpeg",
    ):
        self.input_dir = input_dir
        self.output_dir = output_dir
        self.temp_dir = temp_dir
        self.screenshot_time = screenshot_time
        self.ffmpeg_path = ffmpeg_path

    def convert(self, video: VideoFile) -> Path:
        """
        Converts one video and returns the path of the written MP3.

        Raises:
            CoverExtractionException: If the cover frame could not be extracted.
            AudioMuxException: If the MP3 could not be written. An MP3 already
                at the output path is left untouched.
            ConversionException: If the output directory could not be created.
        """
        video_path = video.source_path(self.input_dir)
        out_dir = video.output_dir(self.output_dir)
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConversionException(
                f"failed to create output directory structure {out_dir}: {e}", video.relative_path
            ) from e

        cover_path = video.cover_path(self.temp_dir)
        mp3_path = video.output_path(self.output_dir)
        partial_path = video.partial_output_path(self.output_dir)

        try:
            self._extract_cover(video, video_path, cover_path)
            self._mux_mp3(video, video_path, cover_path, partial_path)
            try:
                os.replace(partial_path, mp3_path)
            except OSError as e:
                raise AudioMuxException(f"failed to move MP3 into place: {e}", video.relative_path) from e
        finally:
            cover_path.unlink(missing_ok=True)
            partial_path.unlink(missing_ok=True)

        if mp3_path.is_file():
            logger.debug(f"Converted {video} -> {mp3_path} ({formatted_size(mp3_path.stat().st_size)})")
        return mp3_path

    def _extract_cover(self, video: VideoFile, video_path: Path, cover_path: Path):
        cmd = build_cover_cmd(self.ffmpeg_path, video_path, cover_path, self.screenshot_time)
        result = run_cmd(cmd, src_file_for_log=video_path, show_cmd=True)
        if result is None or result.returncode != 0:
            raise CoverExtractionException(
                f"failed to extract cover: {last_stderr_line(result)}", video.relative_path
            )
        # FFmpeg exits cleanly without writing a frame when the timestamp is past the end of the video.
        if not cover_path.is_file():
            raise CoverExtractionException(
                f"failed to extract cover: no frame at {self.screenshot_time:g}s", video.relative_path
            )

    def _mux_mp3(self, video: VideoFile, video_path: Path, cover_path: Path, mp3_path: Path):
        cmd = build_mux_cmd(self.ffmpeg_path, video_path, cover_path, mp3_path, video.stem)
        result = run_cmd(cmd, src_file_for_log=video_path, show_cmd=True)
        if result is None or result.returncode != 0:
            raise AudioMuxException(
                f"failed to convert to MP3: {last_stderr_line(result)}", video.relative_path
            )
