class MediaConverterError(Exception):
    """Base class for all media-converter errors."""


class EngineNotFound(MediaConverterError):
    """FFmpeg could not be found on the execution path."""


class UnsupportedFormat(MediaConverterError):
    """An extension has no codec mapping."""


class FileNotFound(MediaConverterError):
    """An explicitly named input file does not exist."""


class ConversionFailed(MediaConverterError):
    """FFmpeg exited with a non-zero status for one file."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class InvalidFlag(MediaConverterError):
    """A command line flag or its argument was not understood."""
