"""Shared fixtures for media-converter tests."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from media_converter.errors import EngineNotFound  # noqa: E402
from media_converter.options import ConversionRequest  # noqa: E402
from media_converter.prompts import _is_yes, _parse_target  # noqa: E402
from media_converter.transcoder import (  # noqa: E402
    ConversionResult, MediaTranscoder)


class FakeTranscoder(MediaTranscoder):
    """Records requests instead of running FFmpeg.

    Inputs whose name is in `fail_on` produce a failed result; everything
    else writes a small output file and succeeds.
    """

    def __init__(self, fail_on=(), engine_present=True):
        super().__init__(ffmpeg_bin="ffmpeg")
        self.fail_on = set(fail_on)
        self.engine_present = engine_present
        self.requests: list[ConversionRequest] = []

    def locate_engine(self) -> str:
        if not self.engine_present:
            raise EngineNotFound("'ffmpeg' was not found on PATH.")
        return "/usr/bin/ffmpeg"

    def convert(self, request: ConversionRequest) -> ConversionResult:
        self.build_command(request)
        self.requests.append(request)
        if Path(request.input_path).name in self.fail_on:
            return ConversionResult(
                request, False, returncode=1,
                message=f"Error converting {request.input_path}: boom")
        Path(request.output_path).write_bytes(b"converted")
        return ConversionResult(request, True, returncode=0)


@pytest.fixture
def ffmpeg_calls(monkeypatch):
    """Replace subprocess.run with a recorder that reports success."""
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


@pytest.fixture
def in_tmp_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return Path.cwd()


class ScriptedPrompter:
    """Prompter that replays canned answers."""

    def __init__(self, target, overwrite_answers=()):
        self.target = target
        self._answers = list(overwrite_answers)
        self.asked: list[Path] = []

    def request_target_format(self):
        return _parse_target(self.target)

    def confirm_overwrite(self, path):
        self.asked.append(Path(path))
        answer = self._answers.pop(0) if self._answers else ""
        return _is_yes(answer)
