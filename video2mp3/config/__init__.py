"""
Configuration Package for Video2MP3.

This package centralizes the static configuration settings for the application.
Keeping configuration apart from the conversion logic makes it easy to adjust
defaults without touching the pipeline code.

This package includes settings for:
- Application identity, logging format and default directories (`common`).
- Recognized video extensions and the FFmpeg parameters used for cover
  extraction and MP3 muxing (`video`).
- User-overridable paths for the FFmpeg executable and the scratch directory,
  loaded from an optional `config.user.yaml`.
"""
