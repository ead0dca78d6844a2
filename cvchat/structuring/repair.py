"""Repairs character-level damage left by PDF text extraction."""

import re
import unicodedata

# Three or more single-character alphanumeric tokens separated only by spaces or
# tabs, e.g. "J o h n   D o e" from glyph-by-glyph extraction.
_SPACED_RUN_RE = re.compile(r"(?<![^\W_])[^\W_](?:[ \t]+[^\W_](?![^\W_])){2,}")
_INNER_GAP_RE = re.compile(r"[ \t]+")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"[ \t]+([,.;:!?])")


def repair(raw: str) -> str:
    """Collapse spaced-out glyph runs and stray spaces before punctuation.

    Iterates to a fixed point, so repair(repair(x)) == repair(x). Line breaks are
    left untouched.
    """
    text = unicodedata.normalize("NFC", raw)
    while True:
        repaired = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", _collapse_spaced_runs(text))
        if repaired == text:
            return repaired
        text = repaired


def _collapse_spaced_runs(text: str) -> str:
    return _SPACED_RUN_RE.sub(lambda m: _INNER_GAP_RE.sub("", m.group(0)), text)
