"""
Common configuration settings used throughout the application.

This module contains globally shared constants: application identity, logging
format, default directories, worker count and progress bar width. It also
loads user-specific paths from an optional `config.user.yaml`, so the location
of FFmpeg can be customized without modifying the source code.
"""
from pathlib import Path

import yaml
from loguru import logger

# --- Application Info ---
APP_NAME = "Video2MP3"
APP_VERSION = "v2025.02.01"
APP_DESCRIPTION = "Convert video to MP3 with cover image"


# --- User-Defined Path Configuration ---
# 'config.user.yaml' is looked up at the project root first, then in the
# current working directory. Recognized keys:
#
#   paths:
#     ffmpeg_dir: /opt/ffmpeg/bin
#     temp_work_dir: /mnt/ramdisk

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
USER_CONFIG_FILENAME = "config.user.yaml"

# The directory containing the FFmpeg executable. If None, the executable is
# expected to be available on the system's PATH.
MODULE_PATH: Path | None = None

# Parent directory for the scratch directory holding transient cover images.
# If None, the system temporary directory is used.
TEMP_WORK_DIR: Path | None = None

# The user config file that was loaded, if any.
USER_CONFIG_PATH: Path | None = None


def load_user_config(config_path: Path) -> dict:
    """
    Reads the `paths` section of a user config file.

    Returns:
        A dict with the keys `ffmpeg_dir` and `temp_work_dir` (each a `Path` or
        None). A missing or unreadable file yields None for both.
    """
    loaded: dict = {"ffmpeg_dir": None, "temp_work_dir": None}
    if not config_path.is_file():
        return loaded
    try:
        with config_path.open("r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load or parse '{config_path}': {e}")
        return loaded

    if not isinstance(user_config, dict):
        return loaded
    paths_config = user_config.get("paths") or {}
    for key in loaded:
        value = paths_config.get(key)
        if value:
            loaded[key] = Path(value)
    return loaded


for _candidate in (PROJECT_ROOT / USER_CONFIG_FILENAME, Path.cwd() / USER_CONFIG_FILENAME):
    if _candidate.is_file():
        USER_CONFIG_PATH = _candidate
        _user_paths = load_user_config(_candidate)
        MODULE_PATH = _user_paths["ffmpeg_dir"]
        TEMP_WORK_DIR = _user_paths["temp_work_dir"]
        break
else:
    logger.debug(f"User config '{USER_CONFIG_FILENAME}' not found. Relying on system PATH for executables.")


# --- Logging Configuration ---
LOGGER_FORMAT = (
    "<green>{time:MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{thread.name} - <level>{message}</level>"
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


# --- Directory and File Management ---

# Output root used when no --output-dir is given. Relative to the working directory.
DEFAULT_OUTPUT_DIR = Path("output")

# Prefix of the scratch directory that holds the transient cover images.
TEMP_DIR_PREFIX = ".video2mp3_temp_"

# Per-run report written to the output root.
CONVERSION_LOG_FILE_NAME = "conversion_log.yaml"

# Plain-text error log written to the output root when conversions fail.
ERROR_LOG_FILE_NAME = "error.txt"


# --- Processing Rules ---

# Number of concurrent conversion workers.
DEFAULT_MAX_WORKERS = 4

# Width in characters of the progress bar.
PROGRESS_WIDTH = 40


# --- Conversion Status Constants ---
STATUS_CONVERTED = "converted"
STATUS_FAILED = "failed"
