"""
Configuration settings related to video input and MP3 output.

This module defines the recognized video extensions and the fixed parameters
passed to FFmpeg for the two steps of a conversion: extracting a cover frame
and muxing the audio with the cover into an MP3.
"""

# --- Input Settings ---
VIDEO_EXTENSIONS = (".mp4", ".avi", ".mov", ".mkv")

# --- Cover Extraction Settings ---
# Default timestamp (seconds) of the frame used as cover art.
DEFAULT_SCREENSHOT_TIME = 1.0
COVER_WIDTH = 1024
COVER_SUFFIX = "-cover.jpg"
# 1 is the best JPEG quality for the mjpeg encoder (range 1-31).
COVER_QUALITY = 1

# --- MP3 Output Settings ---
MP3_EXTENSION = ".mp3"
# Marks an MP3 that is still being written; it is renamed once FFmpeg succeeds.
PARTIAL_SUFFIX = ".partial"
MP3_ENCODER = "libmp3lame"
# LAME VBR quality; 0 is the highest.
MP3_VBR_QUALITY = 0
ID3V2_VERSION = 3
# Tags of the attached cover stream, one FFmpeg option each. The output has a
# single video stream, so `s:v` and `s:v:0` both address the cover.
COVER_STREAM_METADATA = {
    "metadata:s:v": "title=Album cover",
    "metadata:s:v:0": "comment=Cover (front)",
}
COVER_DISPOSITION = "attached_pic"
