"""
This package contains the conversion pipeline of the Video2MP3 application.

The pipeline orchestrates a whole run: it discovers the video files, manages
the pool of conversion workers and the shared progress display, and
coordinates the services (discovery, conversion, logging).
"""
