"""
Defines custom exception types for the Video2MP3 application.

These exceptions let the pipeline tell apart errors that abort the whole run
(configuration problems, a missing FFmpeg, an unreadable input tree) from
errors that only affect a single file and are reported before moving on.

All custom exceptions inherit from the base `Video2MP3Exception`.
"""
from pathlib import Path


class Video2MP3Exception(Exception):
    """Base class for all custom exceptions in the Video2MP3 application."""

    pass


# --- Pre-flight Exceptions ---
class ConfigurationException(Video2MP3Exception):
    """Base class for invalid settings detected before any work starts."""

    pass


class InvalidScreenshotTimeException(ConfigurationException):
    """Raised when the cover screenshot timestamp is negative."""

    pass


class OutputDirectoryException(ConfigurationException):
    """Raised when the output root cannot be created."""

    pass


class FFmpegNotFoundException(Video2MP3Exception):
    """
    Raised when the FFmpeg executable cannot be found or fails to run.

    Every conversion depends on FFmpeg, so this is checked once at startup
    rather than letting each file fail on its own.
    """

    pass


# --- Discovery Exceptions ---
class DirectoryTraversalException(Video2MP3Exception):
    """
    Raised when the input tree cannot be walked.

    This covers a missing input root and directories that cannot be listed.
    It is the only error raised during a run that makes the run fail.
    """

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


# --- Per-file Conversion Exceptions ---
class ConversionException(Video2MP3Exception):
    """
    Base class for failures converting a single video file.

    These are recoverable: the worker logs them, counts the file as attempted
    and continues with the next file.
    """

    def __init__(self, message: str, relative_path: Path | None = None):
        super().__init__(message)
        self.relative_path = relative_path


class CoverExtractionException(ConversionException):
    """Raised when FFmpeg fails to extract the cover frame from a video."""

    pass


class AudioMuxException(ConversionException):
    """Raised when FFmpeg fails to encode the audio and embed the cover into the MP3."""

    pass
