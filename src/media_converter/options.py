import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from media_converter.errors import InvalidFlag


DEFAULT_BITRATE = "128"

_BITRATE_RE = re.compile(r"^([1-9][0-9]*)k?$", re.IGNORECASE)


class Mode(str, Enum):
    SINGLE = "single"
    BULK = "bulk"


def normalize_bitrate(value: str) -> str:
    """
    Turn a user-supplied bitrate into FFmpeg's "<n>k" form.

    Args:
        value: "192" or "192k".

    Returns:
        Bitrate string such as "192k".
    """
    match = _BITRATE_RE.match(str(value).strip())
    if not match:
        raise InvalidFlag(
            f"Invalid bitrate {value!r}: expected a positive number of kbps")
    return f"{match.group(1)}k"


@dataclass(frozen=True)
class RunOptions:
    """Settings for one run, built once from the command line."""
    mode: Mode
    input_path: Optional[Path] = None
    skip_overwrite_prompt: bool = False
    wipe_sources: bool = False
    bitrate: str = f"{DEFAULT_BITRATE}k"


@dataclass(frozen=True)
class ConversionRequest:
    """One FFmpeg job: a source file and where its conversion goes."""
    input_path: Path
    output_path: Path
    bitrate: str = f"{DEFAULT_BITRATE}k"
