"""Exception hierarchy for profile metadata handling."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "IccError",
    "InvalidLocale",
    "NoData",
    "Irreparable",
    "CannotWriteField",
    "CodecError",
    "ProfileParseError",
]


class IccError(RuntimeError):
    """Base class for all iccworks errors."""


class InvalidLocale(IccError, ValueError):
    """Raised when a locale cannot be split into ICC language/country codes."""

    def __init__(self, locale: Optional[str], reason: str = "") -> None:
        self.locale = locale
        message = f"invalid locale: {locale}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class NoData(IccError, LookupError):
    """Raised when no text exists for the requested field and locale."""


class Irreparable(IccError, UnicodeError):
    """Raised when text is not UTF-8 and the known fix-ups do not help."""


class CannotWriteField(IccError):
    """Raised when the codec refuses a multilingual tag write."""

    def __init__(self, signature: int, message: str) -> None:
        self.signature = signature
        super().__init__(f"cannot write tag 0x{signature:08x}: {message}")


class CodecError(IccError):
    """Opaque failure reported by a tag codec."""


class ProfileParseError(CodecError):
    """Raised when profile bytes cannot be opened at all."""
