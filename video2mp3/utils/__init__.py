"""
Utilities Package for the Video2MP3 Application.

This package contains helper modules that support the pipeline without being
specific to any single part of it.

Modules:
    - ffmpeg_utils.py: Runs external commands and builds the FFmpeg command
      lines for cover extraction and MP3 muxing.
    - format_utils.py: Formats elapsed times and file sizes for log output.
    - module_updater.py: Locates and verifies the FFmpeg executable.
"""
