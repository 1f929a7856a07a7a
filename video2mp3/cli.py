"""
Command-Line Interface (CLI) for Video2MP3.

This module defines the command-line arguments with `argparse`, configures
the loguru logger, and runs the conversion pipeline.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .config import common
from .config.common import (
    APP_DESCRIPTION,
    APP_NAME,
    APP_VERSION,
    DEFAULT_MAX_WORKERS,
    DEFAULT_OUTPUT_DIR,
    LOG_LEVELS,
    LOGGER_FORMAT,
)
from .config.video import DEFAULT_SCREENSHOT_TIME
from .domain.exceptions import FFmpegNotFoundException, Video2MP3Exception
from .pipeline.conversion_pipeline import ConversionPipeline
from .utils.module_updater import Modules


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments for Video2MP3.

    Returns:
        argparse.Namespace: An object containing the parsed command-line
                            arguments as attributes.
    """
    parser = argparse.ArgumentParser(
        prog="video2mp3",
        description=f"{APP_NAME}: {APP_DESCRIPTION}.",
        epilog="The progress bar is written to stdout. Log messages, including per-file failures, go to stderr.",
    )
    parser.add_argument(
        "-d", "--input-dir", type=Path, default=Path("."), help="Input directory path (default: current directory)."
    )
    parser.add_argument(
        "-o", "--output-dir", type=str, default=None,
        help=f"Output directory path (default: '{DEFAULT_OUTPUT_DIR}').",
    )
    parser.add_argument(
        "-t", "--screenshot-time", type=float, default=DEFAULT_SCREENSHOT_TIME,
        help="Screenshot time in seconds for the cover image (e.g., 3.5).",
    )
    parser.add_argument(
        "--workers", type=int, default=DEFAULT_MAX_WORKERS, help="Number of concurrent conversions."
    )
    parser.add_argument(
        "--temp-work-dir", type=Path, default=None,
        help="Directory for temporary cover images. Useful for pointing to a RAM disk.",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO", choices=LOG_LEVELS, help="Set the logging level."
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")

    args = parser.parse_args(argv)

    # An empty -o means the default, not the current directory.
    args.output_dir = Path(args.output_dir) if args.output_dir else DEFAULT_OUTPUT_DIR

    # Validate temp_work_dir if provided. If it doesn't exist, try to create it.
    if args.temp_work_dir is None:
        args.temp_work_dir = common.TEMP_WORK_DIR
    if args.temp_work_dir:
        temp_dir_path = Path(args.temp_work_dir)
        if not temp_dir_path.is_dir():
            try:
                temp_dir_path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                parser.error(
                    f"The temporary working directory '{temp_dir_path}' is not a valid directory and could not be created: {e}"
                )
        args.temp_work_dir = temp_dir_path.resolve()

    return args


def setup_logger(level: str):
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOGGER_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Runs one batch conversion from the command line.

    Returns:
        The process exit status: 0 on success (even if single files failed to
        convert), 1 if the run failed, 130 if interrupted.
    """
    args = get_args(argv)
    setup_logger(args.log_level)
    logger.debug(f"Parsed arguments: {args}")

    logger.info(f"{APP_NAME} {APP_VERSION} - {APP_DESCRIPTION}")
    logger.info(f"Input: {args.input_dir}")
    logger.info(f"Output: {args.output_dir}")
    if common.USER_CONFIG_PATH:
        logger.info(f"User config: {common.USER_CONFIG_PATH}")

    ffmpeg_path = Modules.get_ffmpeg_path()
    try:
        Modules.verify_ffmpeg(ffmpeg_path)
    except FFmpegNotFoundException as e:
        logger.error(f"Error setting up FFmpeg: {e}")
        return 1

    pipeline = ConversionPipeline(
        args.input_dir,
        args.output_dir,
        screenshot_time=args.screenshot_time,
        workers=args.workers,
        ffmpeg_path=ffmpeg_path,
        temp_work_dir=args.temp_work_dir,
    )
    try:
        pipeline.run()
    except Video2MP3Exception as e:
        logger.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Conversion interrupted by user.")
        return 130

    logger.success(f"{APP_NAME} finished.")
    return 0
