"""
This module provides utility functions related to FFmpeg.

It includes a robust function for running command-line processes and the
builders for the two FFmpeg invocations a conversion needs: extracting a cover
frame and muxing the audio track with that cover into an MP3. The commands are
assembled with ffmpeg-python and executed with `run_cmd`.
"""

import os
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional

import ffmpeg
from loguru import logger

from ..config.video import (
    COVER_DISPOSITION,
    COVER_QUALITY,
    COVER_STREAM_METADATA,
    COVER_WIDTH,
    ID3V2_VERSION,
    MP3_ENCODER,
    MP3_VBR_QUALITY,
)


def format_cmd(cmd_list: List[str]) -> str:
    """Returns a shell-style string of the command for logging."""
    if os.name == "nt":
        return subprocess.list2cmdline(cmd_list)
    return shlex.join(cmd_list)


def run_cmd(
    cmd_parts: List[str],
    src_file_for_log: Path = Path(),
    show_cmd: bool = False,
) -> Optional[subprocess.CompletedProcess]:
    """
    Executes an external command and captures its output.

    This is a wrapper around Python's `subprocess.run` that adds logging and
    never goes through a shell.

    Args:
        cmd_parts: The command to execute, as a list of arguments.
        src_file_for_log: The source file being processed, used for logging context.
        show_cmd: If True, the command will be logged at the DEBUG level before execution.

    Returns:
        A `subprocess.CompletedProcess` on completion (check `returncode`), or
        `None` if the command could not be started at all (e.g. the executable
        does not exist).
    """
    cmd_list = [str(part) for part in cmd_parts]

    if not cmd_list:
        logger.error("run_cmd received an empty command list.")
        return None

    display_cmd_str = format_cmd(cmd_list)
    if show_cmd:
        logger.debug(f"Executing: {display_cmd_str}")

    try:
        result = subprocess.run(
            cmd_list,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            shell=False,
        )
    except FileNotFoundError:
        logger.error(
            f"Command not found: '{cmd_list[0]}'. Ensure it's in your system's PATH or configured correctly."
        )
        return None
    except OSError as e:
        logger.error(f"Could not execute command for {src_file_for_log.name or 'N/A'}: {e}")
        return None

    # FFmpeg writes its progress and banner to stderr even on success.
    if result.stderr and result.returncode != 0:
        logger.debug(f"Command stderr (error, rc={result.returncode}): {result.stderr}")
    elif result.stderr:
        logger.trace(f"Command stderr (rc={result.returncode}): {result.stderr[-500:]}")

    return result


def last_stderr_line(result: Optional[subprocess.CompletedProcess]) -> str:
    """
    Returns the last non-empty stderr line of a finished command.

    FFmpeg puts the actual reason for a failure on its last line, which makes a
    compact error message for the console and the error log.
    """
    if result is None:
        return "command could not be started"
    lines = [line.strip() for line in (result.stderr or "").splitlines() if line.strip()]
    if lines:
        return lines[-1]
    return f"exit status {result.returncode}"


def build_cover_cmd(
    ffmpeg_path: str, video_path: Path, cover_path: Path, screenshot_time: float
) -> List[str]:
    """
    Builds the FFmpeg command that extracts one frame of a video as a JPEG.

    The frame is taken at `screenshot_time` seconds, scaled to `COVER_WIDTH`
    pixels wide keeping the aspect ratio, at the best JPEG quality. An existing
    file at `cover_path` is overwritten.
    """
    stream = ffmpeg.input(str(video_path), ss=f"{screenshot_time:f}")
    stream = ffmpeg.output(
        stream,
        str(cover_path),
        vframes=1,
        vf=f"scale={COVER_WIDTH}:-1",
        **{"q:v": COVER_QUALITY, "qmin": COVER_QUALITY, "qmax": COVER_QUALITY},
    )
    return stream.overwrite_output().compile(cmd=ffmpeg_path)


def build_mux_cmd(
    ffmpeg_path: str, video_path: Path, cover_path: Path, mp3_path: Path, title: str
) -> List[str]:
    """
    Builds the FFmpeg command that writes the MP3 with an embedded cover.

    The audio of `video_path` is encoded with LAME at the highest VBR quality,
    the image at `cover_path` is attached as the front cover (ID3v2.3), and the
    MP3's title tag is set to `title`. An existing file at `mp3_path` is
    overwritten.
    """
    video = ffmpeg.input(str(video_path))
    cover = ffmpeg.input(str(cover_path))
    stream = ffmpeg.output(
        video.audio,
        cover,
        str(mp3_path),
        id3v2_version=ID3V2_VERSION,
        metadata=f"title={title}",
        **{
            "c:a": MP3_ENCODER,
            "q:a": MP3_VBR_QUALITY,
            "disposition:v:0": COVER_DISPOSITION,
            **COVER_STREAM_METADATA,
        },
    )
    return stream.overwrite_output().compile(cmd=ffmpeg_path)
