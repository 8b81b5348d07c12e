"""Inspection and training layer."""

from .dpi import DPI, validate_regexs
from .suggestion import Inspection, Suggestion, regex_for_word

__all__ = ["DPI", "Inspection", "Suggestion", "regex_for_word", "validate_regexs"]
