"""
Main entry point for the Video2MP3 application.

This script configures an initial logger and hands over to the CLI, which
parses the command-line arguments and runs the conversion pipeline. The same
entry point is installed as the `video2mp3` console script.
"""

import sys

from loguru import logger

from video2mp3.cli import main
from video2mp3.config.common import LOGGER_FORMAT


# Configure the logger for initial setup.
# The level is overridden once the command-line arguments are parsed.
logger.remove()
log_level = "DEBUG" if __debug__ else "INFO"
logger.add(sys.stderr, level=log_level, format=LOGGER_FORMAT)


if __name__ == "__main__":
    sys.exit(main())
