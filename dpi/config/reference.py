"""
Reference library of known key words, regexes and patterns.

Library codes are five digit numbers grouped by range (see
reference_library.yaml). The helpers here resolve single codes and build
the ready-made word/regex/pattern lists used to configure an inspector,
e.g. ``DPI.with_keys(**nppi_list())``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import yaml

from dpi.config.settings import get_settings
from dpi.errors import InvalidCodeError

LOG = logging.getLogger(__name__)

MIN_CODE = 10000
MAX_CODE = 65535
UNKNOWN_CODE = "<unknown code>"


@lru_cache(maxsize=4)
def _load_library(path: Path) -> dict[int, tuple[str, str]]:
    with path.open("r", encoding="utf-8") as handle:
        raw: dict[str, Any] = yaml.safe_load(handle) or {}

    library: dict[int, tuple[str, str]] = {}
    for entry in raw.get("codes", []):
        code = int(entry["code"])
        if code in library:
            LOG.warning("Reference library: duplicate code %d ignored.", code)
            continue
        library[code] = (str(entry["name"]), str(entry["value"]))

    LOG.debug(
        "Reference library %s loaded with %d codes (version=%s).",
        path,
        len(library),
        raw.get("version"),
    )
    return library


def reference_library() -> dict[int, tuple[str, str]]:
    """Return ``code -> (name, value)`` for the configured library file."""

    return _load_library(get_settings().reference_library_path)


@dataclass(frozen=True, order=True)
class Lib:
    """A single reference library code."""

    code: int

    def __post_init__(self) -> None:
        if not MIN_CODE <= self.code <= MAX_CODE:
            raise InvalidCodeError(self.code)

    @classmethod
    def from_str(cls, text: str) -> Lib:
        """Parse a five digit code such as ``"15001"``."""
        if len(text) != 5 or not text.isascii() or not text.isdigit():
            raise InvalidCodeError(text)
        return cls(int(text))

    @property
    def name(self) -> str | None:
        entry = reference_library().get(self.code)
        return entry[0] if entry else None

    @property
    def value(self) -> str | None:
        entry = reference_library().get(self.code)
        return entry[1] if entry else None

    def __str__(self) -> str:
        return self.value if self.value is not None else UNKNOWN_CODE


def get_value(code: int) -> str | None:
    """Return the word/regex/pattern stored under ``code``."""

    return Lib(code).value


def get_list(min_code: int, max_code: int) -> List[str]:
    """Collect the values of consecutive codes in ``[min_code, max_code]``.

    Collection stops at the first code that is invalid or not in the library,
    so a range below MIN_CODE yields an empty list.
    """

    values: List[str] = []
    for code in range(min_code, max_code + 1):
        try:
            value = Lib(code).value
        except InvalidCodeError:
            break
        if value is None:
            break
        values.append(value)
    return values


def _lists(words: tuple[int, int], regexs: tuple[int, int], patterns: tuple[int, int]) -> Dict[str, List[str]]:
    return {
        "words": get_list(*words),
        "regexs": get_list(*regexs),
        "patterns": get_list(*patterns),
    }


def basic_list() -> Dict[str, List[str]]:
    """Keys that identify basic private data such as names and addresses."""
    return _lists((10000, 10999), (20000, 20999), (30000, 30999))


def health_list() -> Dict[str, List[str]]:
    """Keys that identify health related data."""
    return _lists((0, 1), (26000, 26999), (0, 1))


def nppi_list() -> Dict[str, List[str]]:
    """Keys that identify non-public personal information."""
    return _lists((15000, 15999), (25000, 25999), (35000, 35999))


def pci_list() -> Dict[str, List[str]]:
    """Keys that identify payment card and banking data."""
    return _lists((0, 1), (27000, 27999), (0, 1))


__all__ = [
    "Lib",
    "basic_list",
    "get_list",
    "get_value",
    "health_list",
    "nppi_list",
    "pci_list",
    "reference_library",
]
