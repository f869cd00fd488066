import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from media_converter import __version__
from media_converter.app import ConversionManager
from media_converter.errors import InvalidFlag, MediaConverterError
from media_converter.formats import supported_extensions
from media_converter.options import (
    DEFAULT_BITRATE, Mode, RunOptions, normalize_bitrate)
from media_converter.prompts import ConsolePrompter, Prompter
from media_converter.transcoder import MediaTranscoder

PROG = "media-converter"

USAGE = f"""\
Usage:
  {PROG} [-b BITRATE] [-s] [-w] [-h] [-v] bulk
  {PROG} [-b BITRATE] [-s] [-w] [-h] [-v] single INPUT
  {PROG} help
  {PROG} version

Commands:
  bulk          Convert every supported file in the current directory
  single INPUT  Convert one file
  help          Show this message
  version       Show the version

Options:
  -b BITRATE    Audio bitrate in kbps (default: {DEFAULT_BITRATE})
  -s            Never ask before overwriting; skip existing outputs
  -w            Delete source files after a successful conversion
  -h            Show this message
  -v            Show the version

Formats: {", ".join(supported_extensions())}
"""


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message):
        raise InvalidFlag(message)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = _Parser(prog=PROG, add_help=False, usage=USAGE)
    p.add_argument("-b", dest="bitrate", default=DEFAULT_BITRATE,
                   help="Audio bitrate in kbps")
    p.add_argument("-s", dest="skip", action="store_true",
                   help="Skip existing outputs without asking")
    p.add_argument("-w", dest="wipe", action="store_true",
                   help="Delete sources after successful conversion")
    p.add_argument("-h", dest="help", action="store_true",
                   help="Show usage")
    p.add_argument("-v", dest="version", action="store_true",
                   help="Show version")
    p.add_argument("command", nargs="?", help="bulk, single, help or version")
    p.add_argument("input", nargs="?", help="Input file (single mode)")
    return p.parse_args(argv)


def build_options(args: argparse.Namespace) -> RunOptions:
    """Turn parsed arguments into immutable run options."""
    mode = Mode(args.command)
    if mode is Mode.SINGLE and not args.input:
        raise InvalidFlag("single mode requires an INPUT file")
    if mode is Mode.BULK and args.input:
        raise InvalidFlag(f"unexpected argument for bulk mode: {args.input}")
    return RunOptions(
        mode=mode,
        input_path=Path(args.input) if args.input else None,
        skip_overwrite_prompt=args.skip,
        wipe_sources=args.wipe,
        bitrate=normalize_bitrate(args.bitrate),
    )


def main(
        argv: Optional[Sequence[str]] = None,
        prompter: Optional[Prompter] = None,
        transcoder: Optional[MediaTranscoder] = None
) -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        args = parse_args(argv)
    except InvalidFlag as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.help or args.command == "help":
        print(USAGE, end="")
        return 0
    if args.version or args.command == "version":
        print(f"{PROG} {__version__}")
        return 0
    if args.command not in {m.value for m in Mode}:
        if args.command:
            print(f"Unknown command: {args.command}", file=sys.stderr)
        print(USAGE, end="", file=sys.stderr)
        return 1

    transcoder = transcoder or MediaTranscoder()
    prompter = prompter or ConsolePrompter()

    try:
        options = build_options(args)
        transcoder.locate_engine()
        target = prompter.request_target_format()
        summary = ConversionManager(transcoder, prompter, options).run(target)
    except MediaConverterError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130

    return summary.exit_code


if __name__ == "__main__":
    sys.exit(main())
