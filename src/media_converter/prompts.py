import sys
from pathlib import Path
from typing import Optional, Protocol, TextIO

from media_converter.errors import UnsupportedFormat
from media_converter.formats import MediaFormat, parse_format, supported_extensions


class Prompter(Protocol):
    """Source of the interactive answers a run needs."""

    def request_target_format(self) -> MediaFormat:
        ...

    def confirm_overwrite(self, path: Path) -> bool:
        ...


def _parse_target(answer: str) -> MediaFormat:
    answer = answer.strip().lower()
    if answer not in supported_extensions():
        raise UnsupportedFormat(f"Unsupported target format: {answer!r}")
    return parse_format(answer)


def _is_yes(answer: str) -> bool:
    return answer.strip().lower() == "y"


class ConsolePrompter:
    """Reads answers line by line from a terminal (or any text stream)."""

    def __init__(
            self,
            stdin: Optional[TextIO] = None,
            stdout: Optional[TextIO] = None
    ):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def _ask(self, question: str) -> str:
        self.stdout.write(question)
        self.stdout.flush()
        line = self.stdin.readline()
        # readline() returns "" only at end of input
        return line.rstrip("\n")

    def request_target_format(self) -> MediaFormat:
        self.stdout.write(
            "Supported formats: " + ", ".join(supported_extensions()) + "\n")
        return _parse_target(self._ask("Convert to which format? "))

    def confirm_overwrite(self, path: Path) -> bool:
        return _is_yes(self._ask(f"{path} already exists. Overwrite? [y/N] "))

