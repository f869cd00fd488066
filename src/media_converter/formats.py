from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from media_converter.errors import UnsupportedFormat


class MediaFormat(str, Enum):
    """Supported target/source extensions, in table order."""
    OGG = "ogg"
    WAV = "wav"
    FLAC = "flac"
    AAC = "aac"
    OPUS = "opus"
    MP3 = "mp3"
    MP4 = "mp4"
    MKV = "mkv"
    WEBM = "webm"
    M4A = "m4a"
    AVI = "avi"
    MOV = "mov"
    WMV = "wmv"
    FLV = "flv"
    M4V = "m4v"
    MPEG = "mpeg"
    MPG = "mpg"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CodecMapping:
    """FFmpeg encoder ids for one output extension."""
    extension: MediaFormat
    audio_codec: str
    video_codec: Optional[str] = None

    @property
    def has_video(self) -> bool:
        return self.video_codec is not None


def _entry(fmt: MediaFormat, audio: str, video: Optional[str] = None):
    return fmt, CodecMapping(fmt, audio, video)


# -------------------------------------------------------------------
# Codec table
# -------------------------------------------------------------------
# Audio-only containers carry no video codec; FFmpeg is told to drop
# any video stream for those.
CODEC_TABLE: Mapping[MediaFormat, CodecMapping] = MappingProxyType(dict([
    _entry(MediaFormat.OGG, "libvorbis"),
    _entry(MediaFormat.WAV, "pcm_s16le"),
    _entry(MediaFormat.FLAC, "flac"),
    _entry(MediaFormat.AAC, "aac"),
    _entry(MediaFormat.OPUS, "libopus"),
    _entry(MediaFormat.MP3, "libmp3lame"),
    _entry(MediaFormat.MP4, "aac", "libx264"),
    _entry(MediaFormat.MKV, "aac", "libx264"),
    _entry(MediaFormat.WEBM, "libopus", "libvpx-vp9"),
    _entry(MediaFormat.M4A, "aac"),
    _entry(MediaFormat.AVI, "libmp3lame", "libx264"),
    _entry(MediaFormat.MOV, "aac", "libx264"),
    _entry(MediaFormat.WMV, "wmav2", "wmv2"),
    _entry(MediaFormat.FLV, "aac", "libx264"),
    _entry(MediaFormat.M4V, "aac", "libx264"),
    _entry(MediaFormat.MPEG, "mp2", "mpeg2video"),
    _entry(MediaFormat.MPG, "mp2", "mpeg2video"),
]))


def parse_format(extension: Union[str, MediaFormat]) -> MediaFormat:
    """
    Normalise an extension to a MediaFormat.

    Accepts "MP3", ".mp3" or MediaFormat.MP3 alike.

    Raises:
        UnsupportedFormat: if the extension is not in the table.
    """
    if isinstance(extension, MediaFormat):
        return extension
    key = str(extension).strip().lower().lstrip(".")
    try:
        return MediaFormat(key)
    except ValueError:
        raise UnsupportedFormat(f"Unsupported format: {extension!r}") from None


def lookup(extension: Union[str, MediaFormat]) -> CodecMapping:
    """Return the codec pair for an output extension."""
    return CODEC_TABLE[parse_format(extension)]


def is_supported(extension: Union[str, MediaFormat]) -> bool:
    try:
        parse_format(extension)
    except UnsupportedFormat:
        return False
    return True


def supported_extensions() -> Tuple[str, ...]:
    return tuple(fmt.value for fmt in MediaFormat)
