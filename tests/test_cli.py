import pytest
from conftest import FakeTranscoder, ScriptedPrompter

from media_converter import __version__
from media_converter.cli import main


@pytest.mark.parametrize("argv", [["help"], ["-h"], ["-h", "bulk"]])
def test_help(argv, capsys):
    assert main(argv) == 0
    assert "Usage:" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [["version"], ["-v"]])
def test_version(argv, capsys):
    assert main(argv) == 0
    assert capsys.readouterr().out.strip() == f"media-converter {__version__}"


def test_unknown_command(capsys):
    assert main(["frobnicate"]) == 1
    err = capsys.readouterr().err
    assert "Unknown command: frobnicate" in err
    assert "Usage:" in err


def test_no_command(capsys):
    assert main([]) == 1
    assert "Usage:" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [["-x", "bulk"], ["--loud", "bulk"], ["bulk", "-b"]])
def test_unknown_flag(argv, capsys):
    assert main(argv) == 1
    assert "Error:" in capsys.readouterr().err


def test_bad_bitrate(in_tmp_dir, capsys):
    assert main(["-b", "loud", "bulk"], ScriptedPrompter("mp3"), FakeTranscoder()) == 1
    assert "Invalid bitrate" in capsys.readouterr().err


def test_single_without_input(in_tmp_dir, capsys):
    assert main(["single"], ScriptedPrompter("mp3"), FakeTranscoder()) == 1
    assert "requires an INPUT" in capsys.readouterr().err


def test_missing_engine_aborts_before_prompting(in_tmp_dir, capsys):
    (in_tmp_dir / "song.wav").write_bytes(b"src")

    class ExplodingPrompter(ScriptedPrompter):
        def request_target_format(self):
            raise AssertionError("should not prompt")

    rc = main(["bulk"], ExplodingPrompter("mp3"), FakeTranscoder(engine_present=False))
    assert rc == 1
    assert "not found" in capsys.readouterr().err


@pytest.mark.parametrize("target", ["txt", "", "mp33"])
def test_unsupported_target_aborts(in_tmp_dir, capsys, target):
    (in_tmp_dir / "song.wav").write_bytes(b"src")
    transcoder = FakeTranscoder()
    assert main(["bulk"], ScriptedPrompter(target), transcoder) == 1
    assert transcoder.requests == []
    assert "Unsupported target format" in capsys.readouterr().err


def test_single_missing_file(in_tmp_dir, capsys):
    assert main(["single", "ghost.wav"], ScriptedPrompter("mp3"), FakeTranscoder()) == 1
    assert "File not found" in capsys.readouterr().err


def test_bulk_end_to_end(in_tmp_dir):
    (in_tmp_dir / "song.wav").write_bytes(b"src")
    (in_tmp_dir / "keep.mp3").write_bytes(b"already mp3")
    transcoder = FakeTranscoder()

    rc = main(["-b", "192", "-w", "bulk"], ScriptedPrompter("MP3"), transcoder)

    assert rc == 0
    assert len(transcoder.requests) == 1
    request = transcoder.requests[0]
    assert request.bitrate == "192k"
    assert request.output_path == in_tmp_dir / "song.mp3"
    assert not (in_tmp_dir / "song.wav").exists()
    assert (in_tmp_dir / "keep.mp3").read_bytes() == b"already mp3"


def test_single_end_to_end_builds_ffmpeg_command(in_tmp_dir, monkeypatch, ffmpeg_calls):
    (in_tmp_dir / "song.wav").write_bytes(b"src")
    monkeypatch.setattr("shutil.which", lambda name: f"/usr/bin/{name}")

    rc = main(["single", "song.wav"], ScriptedPrompter("mp3"))

    assert rc == 0
    assert ffmpeg_calls == [[
        "ffmpeg", "-nostdin", "-y", "-i", str(in_tmp_dir / "song.wav"),
        "-vn", "-c:a", "libmp3lame", "-b:a", "128k",
        str(in_tmp_dir / "song.mp3")]]


def test_any_failure_fails_the_run(in_tmp_dir):
    for name in ("a.wav", "b.wav"):
        (in_tmp_dir / name).write_bytes(b"src")
    transcoder = FakeTranscoder(fail_on={"a.wav"})

    rc = main(["bulk"], ScriptedPrompter("ogg"), transcoder)

    assert rc == 1
    assert len(transcoder.requests) == 2


def test_interrupt_exits_130(in_tmp_dir, capsys):
    (in_tmp_dir / "song.wav").write_bytes(b"src")

    class InterruptedTranscoder(FakeTranscoder):
        def convert(self, request):
            raise KeyboardInterrupt

    assert main(["bulk"], ScriptedPrompter("mp3"), InterruptedTranscoder()) == 130
    assert "Interrupted" in capsys.readouterr().err
