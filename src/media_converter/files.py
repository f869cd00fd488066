import logging
from pathlib import Path
from typing import List, Optional

from media_converter.errors import FileNotFound
from media_converter.formats import MediaFormat
from media_converter.options import Mode, RunOptions


logger = logging.getLogger(__name__)


def _bulk_candidates(directory: Path, target: MediaFormat) -> List[Path]:
    candidates = []
    entries = sorted(directory.iterdir(), key=lambda p: p.name)
    for fmt in MediaFormat:
        if fmt is target:
            continue
        suffix = f".{fmt.value}"
        # literal, case-sensitive match like a shell "*.wav" glob: "SONG.WAV"
        # and hidden files are not candidates
        matches = [
            p for p in entries
            if p.name.endswith(suffix)
            and not p.name.startswith(".")
            and p.is_file()]
        candidates.extend(matches)
    return candidates


def enumerate_inputs(
        options: RunOptions,
        target: MediaFormat,
        directory: Optional[Path] = None
) -> List[Path]:
    """
    List the files a run should convert.

    Args:
        options: Run options; `mode` selects single or bulk behaviour.
        target: Chosen output format; bulk mode never picks these up.
        directory: Working directory (defaults to the process cwd).

    Returns:
        Candidate input paths, grouped by extension in table order.

    Raises:
        FileNotFound: single mode and the input is missing.
    """
    directory = Path(directory) if directory is not None else Path.cwd()

    if options.mode is Mode.SINGLE:
        if options.input_path is None:
            raise FileNotFound("No input file given")
        path = Path(options.input_path)
        if not path.is_absolute():
            path = directory / path
        if not path.is_file():
            raise FileNotFound(f"File not found: {options.input_path}")
        return [path]

    candidates = _bulk_candidates(directory, target)
    logger.debug(f"Found {len(candidates)} candidate(s) in {directory}")
    return candidates
