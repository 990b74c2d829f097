"""Tests for ffmpeg command construction and the encode runner."""

import pytest

from tinyMp4 import encoder
from tinyMp4.build_ffmpeg_command import buildFFmpegCommand, scaleFilter
from tinyMp4.helpers import ResolvedBitrates


BITRATES = ResolvedBitrates(video_bps=649_031, audio_bps=64_000)


def _option(cmd, flag):
    assert flag in cmd, f"{flag} missing from {cmd}"
    return cmd[cmd.index(flag) + 1]


def test_build_command_options():
    cmd = buildFFmpegCommand("in.mp4", "out.mp4", BITRATES).compile()

    assert cmd[0] == "ffmpeg"
    assert cmd[1:3] == ["-i", "in.mp4"]
    assert "out.mp4" in cmd
    assert "-y" in cmd
    assert _option(cmd, "-c:v") == "libx264"
    assert _option(cmd, "-preset") == "medium"
    assert _option(cmd, "-crf") == "32"
    assert _option(cmd, "-b:v") == "649k"
    assert _option(cmd, "-maxrate") == "649k"
    assert _option(cmd, "-bufsize") == "162k"
    assert _option(cmd, "-vf") == "scale='min(640,iw)':-2"
    assert _option(cmd, "-c:a") == "aac"
    assert _option(cmd, "-b:a") == "64k"
    assert _option(cmd, "-movflags") == "+faststart"
    assert "-threads" not in cmd


def test_build_command_threads():
    cmd = buildFFmpegCommand("in.mp4", "out.mp4", BITRATES, threads=6).compile()
    assert _option(cmd, "-threads") == "6"


def test_scale_filter_width():
    assert scaleFilter(1280) == "scale='min(1280,iw)':-2"


def test_compile_encode_command_uses_binary():
    cmd = encoder.compileEncodeCommand("in.mp4", "out.mp4", BITRATES, cmd="/opt/ffmpeg/bin/ffmpeg")
    assert cmd[0] == "/opt/ffmpeg/bin/ffmpeg"


class _FakePopen:
    calls = []
    returncode = 0

    def __init__(self, args):
        type(self).calls.append(list(args))

    def wait(self):
        return type(self).returncode


@pytest.fixture
def fake_popen(monkeypatch):
    _FakePopen.calls = []
    _FakePopen.returncode = 0
    monkeypatch.setattr(encoder.subprocess, "Popen", _FakePopen)
    return _FakePopen


def test_encode_file_success(fake_popen):
    result = encoder.encodeFile("in.mp4", "out.mp4", BITRATES, threads=2)
    assert result == encoder.EncodeResult(success=True, exit_code=0)
    assert len(fake_popen.calls) == 1
    assert fake_popen.calls[0][0] == "ffmpeg"
    assert _option(fake_popen.calls[0], "-threads") == "2"


def test_encode_file_nonzero_exit(fake_popen):
    fake_popen.returncode = 187
    result = encoder.encodeFile("in.mp4", "out.mp4", BITRATES)
    assert result.success is False
    assert result.exit_code == 187


def test_encode_file_killed_by_signal(fake_popen):
    fake_popen.returncode = -9
    result = encoder.encodeFile("in.mp4", "out.mp4", BITRATES)
    assert result.success is False
    assert result.exit_code is None


def test_encode_file_missing_ffmpeg(monkeypatch):
    def missing(args):
        raise FileNotFoundError(2, "No such file or directory", args[0])

    monkeypatch.setattr(encoder.subprocess, "Popen", missing)
    with pytest.raises(OSError):
        encoder.encodeFile("in.mp4", "out.mp4", BITRATES)
