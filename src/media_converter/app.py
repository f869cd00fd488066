import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from media_converter.files import enumerate_inputs
from media_converter.formats import MediaFormat, is_supported
from media_converter.options import ConversionRequest, Mode, RunOptions
from media_converter.prompts import Prompter
from media_converter.transcoder import MediaTranscoder


logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Dataclasses
# -------------------------------------------------------------------

class FileOutcome(Enum):
    CONVERTED = "converted"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class RunSummary:
    """Per-run tally of what happened to each candidate file."""
    converted: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def record(self, path: Path, outcome: FileOutcome) -> None:
        getattr(self, outcome.value).append(path)

    @property
    def total(self) -> int:
        return len(self.converted) + len(self.skipped) + len(self.failed)

    @property
    def exit_code(self) -> int:
        # any failed file fails the run; skipped files do not
        return 1 if self.failed else 0


def resolve_output_path(input_path: Path, target: MediaFormat) -> Path:
    """Same directory and base name, target extension."""
    return input_path.with_suffix(f".{target.value}")


# -------------------------------------------------------------------
# Manager Class
# -------------------------------------------------------------------

class ConversionManager:
    """Walks the candidate files and converts them one at a time."""

    def __init__(
            self,
            transcoder: MediaTranscoder,
            prompter: Prompter,
            options: RunOptions,
            directory: Optional[Path] = None
    ):
        self.transcoder = transcoder
        self.prompter = prompter
        self.options = options
        self.directory = Path(directory) if directory is not None else Path.cwd()

    # -------------------------------
    # Per-file pipeline
    # -------------------------------
    def _should_write(self, output_path: Path) -> bool:
        if not output_path.exists():
            return True
        if self.options.skip_overwrite_prompt:
            logger.info(f"⏭️ Skipping {output_path}: already exists")
            return False
        if self.prompter.confirm_overwrite(output_path):
            return True
        logger.info(f"⏭️ Skipping {output_path}: not overwritten")
        return False

    def _wipe_source(self, input_path: Path, summary: RunSummary) -> bool:
        try:
            input_path.unlink()
        except OSError as e:
            message = f"Failed to delete {input_path}: {e}"
            logger.error(f"❌ {message}")
            summary.errors.append(message)
            return False
        logger.info(f"🗑️ Deleted {input_path}")
        return True

    def process_file(
            self,
            input_path: Path,
            target: MediaFormat,
            summary: RunSummary
    ) -> FileOutcome:
        """Run one file through output resolution, overwrite check,
        conversion and optional source removal."""
        if not is_supported(input_path.suffix):
            message = f"Unsupported source format: {input_path}"
            logger.error(f"❌ {message}")
            summary.errors.append(message)
            return FileOutcome.FAILED

        output_path = resolve_output_path(input_path, target)
        if output_path == input_path:
            logger.info(f"⏭️ Skipping {input_path}: already {target.value}")
            return FileOutcome.SKIPPED

        if not self._should_write(output_path):
            return FileOutcome.SKIPPED

        request = ConversionRequest(
            input_path=input_path,
            output_path=output_path,
            bitrate=self.options.bitrate)

        logger.info(f"🔄 Converting {input_path} → {output_path}")
        result = self.transcoder.convert(request)
        if not result.success:
            logger.error(f"❌ {result.message}")
            summary.errors.append(result.message)
            return FileOutcome.FAILED
        logger.info(f"✅ Done: {output_path}")

        if self.options.wipe_sources:
            if not self._wipe_source(input_path, summary):
                return FileOutcome.FAILED
        return FileOutcome.CONVERTED

    # -------------------------------
    # Run
    # -------------------------------
    def run(self, target: MediaFormat) -> RunSummary:
        """
        Convert every candidate file to `target`.

        Individual failures are recorded and the run continues with the
        next file.

        Raises:
            FileNotFound: single mode and the input file is missing.
        """
        summary = RunSummary()
        inputs = enumerate_inputs(self.options, target, self.directory)

        if self.options.mode is Mode.BULK and not inputs:
            print(f"No files to convert to {target.value} in {self.directory}")
            return summary

        for input_path in inputs:
            outcome = self.process_file(input_path, target, summary)
            summary.record(input_path, outcome)

        if self.options.mode is Mode.BULK:
            print(
                f"Bulk conversion to {target.value} complete:"
                f" {len(summary.converted)} converted,"
                f" {len(summary.skipped)} skipped,"
                f" {len(summary.failed)} failed")
        elif summary.converted:
            output_path = resolve_output_path(summary.converted[0], target)
            print(f"✅ Converted {summary.converted[0]} → {output_path}")
        elif summary.failed:
            print(f"❌ Conversion of {inputs[0]} failed")
        else:
            print(f"Skipped {inputs[0]}")
        return summary
