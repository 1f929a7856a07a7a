"""Tests for user config loading and FFmpeg lookup."""
import subprocess
import sys
from pathlib import Path

import pytest

from video2mp3.config.common import load_user_config
from video2mp3.domain.exceptions import FFmpegNotFoundException
from video2mp3.utils import module_updater
from video2mp3.utils.module_updater import Modules


class TestLoadUserConfig:
    def test_reads_paths(self, tmp_path):
        config_file = tmp_path / "config.user.yaml"
        config_file.write_text(
            "paths:\n  ffmpeg_dir: /opt/ffmpeg/bin\n  temp_work_dir: /mnt/ramdisk\n", encoding="utf-8"
        )

        loaded = load_user_config(config_file)

        assert loaded == {"ffmpeg_dir": Path("/opt/ffmpeg/bin"), "temp_work_dir": Path("/mnt/ramdisk")}

    def test_missing_file(self, tmp_path):
        assert load_user_config(tmp_path / "config.user.yaml") == {"ffmpeg_dir": None, "temp_work_dir": None}

    def test_empty_values(self, tmp_path):
        config_file = tmp_path / "config.user.yaml"
        config_file.write_text("paths:\n  ffmpeg_dir:\n", encoding="utf-8")
        assert load_user_config(config_file) == {"ffmpeg_dir": None, "temp_work_dir": None}

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "config.user.yaml"
        config_file.write_text("paths: [unclosed", encoding="utf-8")
        assert load_user_config(config_file) == {"ffmpeg_dir": None, "temp_work_dir": None}


class TestGetFFmpegPath:
    def test_falls_back_to_path(self, monkeypatch):
        monkeypatch.setattr(module_updater.common, "MODULE_PATH", None)
        assert Modules.get_ffmpeg_path() == "ffmpeg"

    def test_uses_configured_directory(self, tmp_path):
        exe = tmp_path / ("ffmpeg.exe" if sys.platform == "win32" else "ffmpeg")
        exe.write_bytes(b"")
        assert Modules.get_ffmpeg_path(tmp_path) == str(exe)

    def test_configured_directory_without_executable(self, tmp_path):
        assert Modules.get_ffmpeg_path(tmp_path) == "ffmpeg"


class TestVerifyFFmpeg:
    def test_returns_version_line(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 0, "ffmpeg version 7.1\nbuilt with gcc\n", "")

        monkeypatch.setattr(module_updater.subprocess, "run", fake_run)
        assert Modules.verify_ffmpeg("ffmpeg") == "ffmpeg version 7.1"

    def test_missing_executable(self, tmp_path):
        with pytest.raises(FFmpegNotFoundException):
            Modules.verify_ffmpeg(str(tmp_path / "no-such-ffmpeg"))

    def test_failing_executable(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(1, cmd, stderr="broken build")

        monkeypatch.setattr(module_updater.subprocess, "run", fake_run)
        with pytest.raises(FFmpegNotFoundException, match="broken build"):
            Modules.verify_ffmpeg("ffmpeg")
