"""Turns repaired CV text into normalized markdown."""

import re

from cvchat.structuring.classifier import (
    EMAIL_RE,
    PHONE_RE,
    classify_line,
    is_phone_number,
)
from cvchat.structuring.dates import DATE_RE
from cvchat.structuring.models import (
    Bullet,
    CompanyName,
    ContactInfo,
    JobTitle,
    Lexicon,
    LineKind,
    SectionHeader,
)

CONTACT_HEADER = "CONTACT INFORMATION"

_EXCESS_BLANK_LINES_RE = re.compile(r"\n{3,}")


def structure(repaired: str, lexicon: Lexicon) -> str:
    """Classify each non-blank line and emit markdown.

    Section headers become `## HEADER`, job titles `### title`, companies bold,
    bullets `- item`. Plain lines get dates, emails and phone numbers emphasized.
    Runs of blank lines collapse to a single one.
    """
    lines = [line.strip() for line in repaired.split("\n")]
    lines = [line for line in lines if line]

    parts: list[str] = []
    previous: LineKind | None = None
    seen_header = False
    for i, line in enumerate(lines):
        next_line = lines[i + 1] if i + 1 < len(lines) else ""
        kind = classify_line(line, next_line, previous, lexicon)
        if isinstance(kind, SectionHeader):
            seen_header = True
            parts.append(f"\n## {kind.text.upper()}\n\n")
        elif isinstance(kind, JobTitle):
            parts.append(f"\n### {kind.text}\n")
        elif isinstance(kind, CompanyName):
            parts.append(f"**{kind.text}**\n")
        elif isinstance(kind, Bullet):
            parts.extend(f"- {item}\n" for item in kind.items)
        elif isinstance(kind, ContactInfo):
            if not seen_header:
                seen_header = True
                parts.append(f"\n## {CONTACT_HEADER}\n\n")
            parts.append(f"- {emphasize_inline(kind.text)}\n")
        else:
            parts.append(f"{_escape_heading(emphasize_inline(kind.text))}\n")
        previous = kind

    return _EXCESS_BLANK_LINES_RE.sub("\n\n", "".join(parts)).strip()


def emphasize_inline(text: str) -> str:
    """Wrap dates in `*...*` and emails/phone numbers in `**...**`."""
    spans: list[tuple[int, int, str]] = []
    spans.extend((m.start(), m.end(), "**") for m in EMAIL_RE.finditer(text))
    spans.extend(
        (m.start(), m.end(), "**")
        for m in PHONE_RE.finditer(text)
        if is_phone_number(m.group(0))
    )
    spans.extend((m.start(), m.end(), "*") for m in DATE_RE.finditer(text))
    if not spans:
        return text

    spans.sort(key=lambda span: (span[0], -span[1]))
    out: list[str] = []
    cursor = 0
    for start, end, marker in spans:
        if start < cursor:
            continue
        out.append(text[cursor:start])
        out.append(f"{marker}{text[start:end]}{marker}")
        cursor = end
    out.append(text[cursor:])
    return "".join(out)


def _escape_heading(text: str) -> str:
    # A plain line must not read as a header downstream.
    return f"\\{text}" if text.startswith("#") else text
