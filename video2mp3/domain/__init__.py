"""
This package contains the core domain models of the Video2MP3 application.

The domain layer describes the concepts the pipeline works with, independent of
the CLI, the worker pool and the FFmpeg invocations.

Modules:
    exceptions.py: Custom exception types, split between errors that abort the
                   run and errors that only affect one file.
    media.py: The `VideoFile` work item and the mapping from an input video to
              its MP3 output and temporary cover image.
    temp_models.py: `ConversionResult`, the per-file outcome collected for the
                    run report.
"""
