"""Tests for discovering video files in the input tree."""
import os
from pathlib import Path

import pytest

from video2mp3.domain.exceptions import DirectoryTraversalException
from video2mp3.domain.media import VideoFile
from video2mp3.services.file_processing_service import ProcessVideoFiles


class TestIterFiles:
    def test_yields_only_recognized_extensions(self, make_tree):
        """M recognized and K unrecognized files yield exactly M work items."""
        root = make_tree(["a.mp4", "b.avi", "c.mov", "d.mkv", "notes.txt", "song.mp3", "cover.jpg"])
        finder = ProcessVideoFiles(root)

        videos = list(finder.iter_files())

        assert {str(v) for v in videos} == {"a.mp4", "b.avi", "c.mov", "d.mkv"}
        assert finder.count() == 4

    def test_paths_are_relative_and_recursive(self, make_tree):
        root = make_tree(["top.mp4", "sub/inner.mkv", "sub/deeper/last.avi", "sub/deeper/readme.md"])

        videos = list(ProcessVideoFiles(root).iter_files())

        assert all(isinstance(v, VideoFile) for v in videos)
        assert {v.relative_path for v in videos} == {
            Path("top.mp4"),
            Path("sub/inner.mkv"),
            Path("sub/deeper/last.avi"),
        }

    def test_extension_match_is_case_insensitive(self, make_tree):
        root = make_tree(["a.MOV", "b.Mp4", "c.MKV"])
        assert ProcessVideoFiles(root).count() == 3

    def test_order_is_deterministic(self, make_tree):
        root = make_tree(["z.mp4", "a.mp4", "m/b.mp4", "c/d.mp4"])
        finder = ProcessVideoFiles(root)

        first = [str(v) for v in finder.iter_files()]
        second = [str(v) for v in finder.iter_files()]

        assert first == second
        assert first == ["a.mp4", "z.mp4", "c/d.mp4", "m/b.mp4"]

    def test_directories_with_video_extension_are_skipped(self, make_tree):
        root = make_tree(["real.mp4"])
        (root / "folder.mp4").mkdir()

        assert [str(v) for v in ProcessVideoFiles(root).iter_files()] == ["real.mp4"]

    def test_count_matches_iteration(self, make_tree):
        root = make_tree([f"dir{i}/clip{j}.mp4" for i in range(3) for j in range(4)] + ["x.txt"])
        finder = ProcessVideoFiles(root)
        assert finder.count() == len(list(finder.iter_files())) == 12

    def test_empty_directory(self, make_tree):
        root = make_tree([])
        assert ProcessVideoFiles(root).count() == 0


class TestTraversalErrors:
    def test_missing_root_raises(self, tmp_path):
        finder = ProcessVideoFiles(tmp_path / "does-not-exist")

        with pytest.raises(DirectoryTraversalException) as exc_info:
            list(finder.iter_files())
        assert exc_info.value.path == tmp_path / "does-not-exist"

    def test_root_that_is_a_file_raises(self, tmp_path):
        file_root = tmp_path / "a.mp4"
        file_root.write_bytes(b"")

        with pytest.raises(DirectoryTraversalException):
            ProcessVideoFiles(file_root).count()

    @pytest.mark.skipif(
        os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="directory permissions are not enforced for root or on Windows",
    )
    def test_unreadable_directory_raises_after_earlier_files(self, make_tree):
        root = make_tree(["a.mp4", "locked/b.mp4"])
        locked = root / "locked"
        locked.chmod(0)
        try:
            yielded = []
            with pytest.raises(DirectoryTraversalException):
                for video in ProcessVideoFiles(root).iter_files():
                    yielded.append(str(video))
            assert yielded == ["a.mp4"]
        finally:
            locked.chmod(0o755)

    def test_unlistable_subdirectory_raises_after_earlier_files(self, make_tree, monkeypatch):
        root = make_tree(["a.mp4", "locked/b.mp4", "z.mp4"])
        real_scandir = os.scandir

        def scandir(path="."):
            if Path(path).name == "locked":
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)

        yielded = []
        with pytest.raises(DirectoryTraversalException) as exc_info:
            for video in ProcessVideoFiles(root).iter_files():
                yielded.append(str(video))

        assert yielded == ["a.mp4", "z.mp4"]
        assert exc_info.value.path == root / "locked"
        assert "Permission denied" in str(exc_info.value)
