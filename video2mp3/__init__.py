"""
Video2MP3: batch conversion of video files to MP3 with an embedded cover image.

The package is organized in layers:

- `config`: static settings and the optional user config file.
- `domain`: the `VideoFile` work item, conversion results and exceptions.
- `services`: discovery, conversion, progress display and log files.
- `pipeline`: the worker pool that runs a whole batch.
- `cli`: argument parsing and the console entry point.
"""
