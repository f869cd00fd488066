import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from media_converter.errors import (
    ConversionFailed, EngineNotFound, UnsupportedFormat)
from media_converter.formats import lookup
from media_converter.options import ConversionRequest


logger = logging.getLogger(__name__)

VIDEO_CRF = 23
VIDEO_PRESET = "medium"
STDERR_TAIL_LINES = 5


@dataclass
class ConversionResult:
    """Outcome of a single FFmpeg invocation."""
    request: ConversionRequest
    success: bool
    returncode: Optional[int] = None
    message: str = ""


class MediaTranscoder:
    """
    Convert one media file to another container/codec pair with FFmpeg.
    Codec choice is driven entirely by the output file's extension.
    """

    def __init__(self, ffmpeg_bin: str = "ffmpeg"):
        self.ffmpeg_bin = ffmpeg_bin

    def locate_engine(self) -> str:
        """
        Resolve the FFmpeg binary on the execution path.

        Returns:
            Absolute path of the binary.

        Raises:
            EngineNotFound: if FFmpeg is not installed or not on PATH.
        """
        path = shutil.which(self.ffmpeg_bin)
        if path is None:
            raise EngineNotFound(
                f"'{self.ffmpeg_bin}' was not found on PATH."
                " Install FFmpeg and try again.")
        return path

    @staticmethod
    def _run_subprocess(cmd: list[str]) -> subprocess.CompletedProcess:
        """Run a subprocess command and return the result."""
        result = subprocess.run(cmd, capture_output=True, text=True)
        if result.returncode != 0:
            lines = result.stderr.strip().splitlines()
            tail = "\n".join(lines[-STDERR_TAIL_LINES:])
            raise ConversionFailed(
                f"FFmpeg exited with status {result.returncode}:\n{tail}",
                returncode=result.returncode)
        return result

    def build_command(self, request: ConversionRequest) -> list[str]:
        """Construct the ffmpeg command for one request."""
        output_ext = Path(request.output_path).suffix.lower().lstrip(".")
        codecs = lookup(output_ext)

        # FFmpeg must never stop to ask on stdin; overwrite decisions are
        # made before we get here.
        cmd = [self.ffmpeg_bin, "-nostdin", "-y",
               "-i", str(request.input_path)]

        # ------------------------------------------------------------
        # Video stream
        # ------------------------------------------------------------
        if codecs.has_video:
            cmd += ["-c:v", codecs.video_codec,
                    "-crf", str(VIDEO_CRF),
                    "-preset", VIDEO_PRESET]
        else:
            cmd.append("-vn")

        # ------------------------------------------------------------
        # Audio stream + Output
        # ------------------------------------------------------------
        cmd += ["-c:a", codecs.audio_codec,
                "-b:a", request.bitrate,
                str(request.output_path)]
        return cmd

    def convert(self, request: ConversionRequest) -> ConversionResult:
        """
        Convert a single file.

        Failures are returned, not raised, so a batch can carry on.

        Args:
            request: Input path, output path and audio bitrate.

        Returns:
            ConversionResult describing success or the reason for failure.
        """
        try:
            cmd = self.build_command(request)
        except UnsupportedFormat as e:
            return ConversionResult(request, False, message=str(e))

        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = self._run_subprocess(cmd)
        except ConversionFailed as e:
            return ConversionResult(
                request, False,
                returncode=e.returncode,
                message=f"Error converting {request.input_path}: {e}")
        except OSError as e:
            return ConversionResult(
                request, False,
                message=f"Error converting {request.input_path}: {e}")

        return ConversionResult(request, True, returncode=result.returncode)
