"""
This module provides the Modules class to locate and verify the external
FFmpeg executable required by the application.
"""
import subprocess
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from ..config import common
from ..domain.exceptions import FFmpegNotFoundException


class Modules:
    """
    A utility class for the external FFmpeg executable.

    It reads the `ffmpeg_dir` path from the user's `config.user.yaml` to locate
    the executable, and falls back to the system's PATH if no specific path is
    configured.
    """

    @staticmethod
    def get_ffmpeg_path(module_path: Optional[Path] = None) -> str:
        """
        Determines the FFmpeg executable path to use.

        It prioritizes the given directory, then the configured `ffmpeg_dir`.
        If neither holds an executable, it falls back to 'ffmpeg', which relies
        on the executable being available in the system's PATH.

        Returns:
            The command or absolute path of the FFmpeg executable.
        """
        ffmpeg_exe_name = "ffmpeg.exe" if sys.platform == "win32" else "ffmpeg"
        module_path = module_path or common.MODULE_PATH

        if module_path and module_path.is_dir():
            configured_ffmpeg_path = module_path / ffmpeg_exe_name
            if configured_ffmpeg_path.is_file():
                logger.debug(f"Using FFmpeg from configured path: '{configured_ffmpeg_path}'")
                return str(configured_ffmpeg_path)
            logger.warning(
                f"`ffmpeg_dir` is configured, but '{ffmpeg_exe_name}' was not found there. Falling back to system PATH."
            )

        return "ffmpeg"

    @staticmethod
    def verify_ffmpeg(ffmpeg_cmd: str) -> str:
        """
        Verifies that FFmpeg can be executed by running `ffmpeg -version`.

        Returns:
            The first line of the version output.

        Raises:
            FFmpegNotFoundException: If the executable is missing or exits with an error.
        """
        try:
            result = subprocess.run(
                [ffmpeg_cmd, "-version"],
                check=True,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except subprocess.CalledProcessError as e:
            raise FFmpegNotFoundException(
                f"FFmpeg version command failed (return code {e.returncode}): {e.stderr}"
            ) from e
        except OSError as e:
            raise FFmpegNotFoundException(
                "FFmpeg not found. Please ensure FFmpeg is installed and accessible: either add it to "
                "your system's PATH or specify its location in the 'config.user.yaml' file."
            ) from e

        version_line = result.stdout.splitlines()[0] if result.stdout else ffmpeg_cmd
        logger.info(f"FFmpeg version check successful: {version_line}")
        return version_line
