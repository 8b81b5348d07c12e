"""Exception types raised by the inspector."""

from __future__ import annotations

from typing import Iterable


class DPIError(Exception):
    """Base class for all inspector errors."""


class InvalidRegexError(DPIError, ValueError):
    """One or more configured regexes failed to compile.

    Every invalid pattern is reported, not only the first one found.
    """

    def __init__(self, patterns: Iterable[str]) -> None:
        self.patterns: list[str] = list(patterns)
        super().__init__(f"Invalid regex pattern(s): {self.patterns!r}")


class DPIDecodeError(DPIError, ValueError):
    """A serialized DPI snapshot could not be decoded."""


class InvalidCodeError(DPIError, ValueError):
    """A reference library code is out of range or unparsable."""

    def __init__(self, code: object) -> None:
        self.code = code
        super().__init__(f"invalid code: {code!r}")


__all__ = ["DPIError", "InvalidRegexError", "DPIDecodeError", "InvalidCodeError"]
