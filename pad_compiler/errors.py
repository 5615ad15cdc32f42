"""
Shared exception hierarchy for the PAD compiler.
"""


class PadCompilerError(Exception):
    """Base class for all compiler related errors."""


class SourceParseError(PadCompilerError):
    """Raised when the grammar parser rejects the source text."""


class UnsupportedLanguageError(SourceParseError):
    """Raised when no front end is registered for the requested language."""


class EmptyResultError(PadCompilerError):
    """Raised when the source parses but contains no function definitions."""

    def __init__(self, message: str = "No function found") -> None:
        super().__init__(message)


class EncodingError(PadCompilerError):
    """Raised when a wire payload cannot be decoded into PAD nodes."""
