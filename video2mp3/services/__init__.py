"""
Services Package for the Video2MP3 Application.

This package contains the "service layer" of the application: classes that each
perform one task of the pipeline and are coordinated by
`video2mp3.pipeline.conversion_pipeline`.

- **File Processing Service (`ProcessVideoFiles`):**
  Walks the input directory and yields the video files to convert.

- **Conversion Service (`Mp3Converter`):**
  Runs the two FFmpeg steps for one video (cover extraction, then MP3 muxing)
  and cleans up the temporary cover image.

- **Progress Service (`ProgressTracker`):**
  The lock-protected completion counter and its progress bar.

- **Logging Service (`ErrorLog`, `ConversionLog`):**
  Writes the plain-text error log and the YAML run report into the output
  directory, separate from the real-time console logging.
"""
