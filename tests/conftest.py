"""Test fixtures for the Video2MP3 tests."""
import io
import subprocess
import threading
from pathlib import Path

import pytest

from video2mp3.services.progress_service import ProgressTracker


class FakeFFmpeg:
    """
    Stands in for `run_cmd` so conversions can run without a real FFmpeg.

    It recognizes the two commands by their output file (`.jpg` cover or
    `.mp3`), writes a small placeholder file for each, and fails for the
    videos listed in `fail_cover` / `fail_mux` (by stem or by file name).
    """

    def __init__(self):
        self.calls = []
        self.fail_cover = set()
        self.fail_mux = set()
        self.cover_without_output = set()
        self.cover_present_at_mux = {}
        self._lock = threading.Lock()

    def __call__(self, cmd_parts, src_file_for_log=Path(), show_cmd=False):
        cmd = [str(part) for part in cmd_parts]
        input_indices = [i for i, arg in enumerate(cmd) if arg == "-i"]
        source = Path(cmd[input_indices[0] + 1])
        output = Path(next(arg for arg in reversed(cmd) if arg.endswith((".jpg", ".mp3"))))
        step = "cover" if output.suffix == ".jpg" else "mux"
        with self._lock:
            self.calls.append((step, source.name))

        if step == "cover":
            if self._listed(source, self.fail_cover):
                return subprocess.CompletedProcess(cmd, 1, "", "Invalid data found when processing input\n")
            if source.stem not in self.cover_without_output:
                output.write_bytes(b"\xff\xd8fake-jpeg")
            return subprocess.CompletedProcess(cmd, 0, "", "")

        cover = Path(cmd[input_indices[1] + 1])
        with self._lock:
            self.cover_present_at_mux[source.name] = cover.is_file()
        if self._listed(source, self.fail_mux):
            output.write_bytes(b"partial")
            return subprocess.CompletedProcess(cmd, 1, "", "Output file #0 does not contain any stream\n")
        output.write_bytes(b"ID3fake-mp3")
        return subprocess.CompletedProcess(cmd, 0, "", "")

    @staticmethod
    def _listed(source, names):
        return source.stem in names or source.name in names

    def steps_for(self, filename):
        return [step for step, name in self.calls if name == filename]


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    """Patch the conversion service to use FakeFFmpeg instead of running FFmpeg."""
    fake = FakeFFmpeg()
    monkeypatch.setattr("video2mp3.services.conversion_service.run_cmd", fake)
    return fake


@pytest.fixture
def make_tree(tmp_path):
    """Create placeholder files under a root directory (default: tmp_path/input)."""

    def _make(relative_paths, root=None):
        root = root or tmp_path / "input"
        root.mkdir(parents=True, exist_ok=True)
        for relative_path in relative_paths:
            file_path = root / relative_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(b"not really a video")
        return root

    return _make


@pytest.fixture
def progress_stream():
    return io.StringIO()


@pytest.fixture
def progress(progress_stream):
    """A ProgressTracker that renders into an in-memory stream."""
    return ProgressTracker(stream=progress_stream)
