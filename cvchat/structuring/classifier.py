"""Line classification for the markdown structurer.

Each classifier is a pure function of the line, its neighbours and the lexicon.
classify_line() tries them in priority order: section header, job title, company
name, bullet, contact info, plain text. Earlier categories are more specific; the
looser bullet and plain rules would swallow them otherwise.
"""

import re

from cvchat.structuring.dates import has_date_pattern
from cvchat.structuring.models import (
    Bullet,
    CompanyName,
    ContactInfo,
    JobTitle,
    Lexicon,
    LineKind,
    Plain,
    SectionHeader,
)

HEADER_MAX_LENGTH = 50
HEADER_MAX_WORDS = 5
CAPS_HEADER_MAX_LENGTH = 40
CAPS_HEADER_MIN_WORDS = 2
CAPS_HEADER_MAX_WORDS = 4
DATED_TITLE_MIN_LENGTH = 6
DATED_TITLE_MAX_LENGTH = 80
COMPANY_MAX_LENGTH = 80
COMPANY_MAX_WORDS = 6
CONTACT_MAX_LENGTH = 120

BULLET_GLYPHS = "-•*▪‣◦●■–"
_LEADING_BULLET_RE = re.compile(rf"^[{re.escape(BULLET_GLYPHS)}]\s*")
_BULLET_START_RE = re.compile(rf"^[{re.escape(BULLET_GLYPHS)}]\s")
_INLINE_BULLET_RE = re.compile(r"\s*[•▪‣◦●■]\s*")
_LABEL_RE = re.compile(r"^[A-Z][A-Za-z]+(?: [A-Za-z]+)?:\s*\S")
_WHITESPACE_RE = re.compile(r"\s+")

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"(?<![\w/])\+?\(?\d[\d\s().-]{6,}\d(?![\w/])")
PROFILE_URL_RE = re.compile(
    r"\b(?:https?://)?(?:www\.)?(?:linkedin\.com|github\.com|gitlab\.com|twitter\.com|x\.com)/\S*",
    re.IGNORECASE,
)
PHONE_MIN_DIGITS = 9


def collapse_whitespace(line: str) -> str:
    return _WHITESPACE_RE.sub(" ", line).strip()


def is_phone_number(candidate: str) -> bool:
    """A phone-shaped match with enough digits to not be a year range."""
    return sum(ch.isdigit() for ch in candidate) >= PHONE_MIN_DIGITS


def is_section_header(line: str, lexicon: Lexicon) -> bool:
    text = line.rstrip(":").strip()
    lowered = text.lower()
    if not text or "@" in text or has_date_pattern(text):
        return False
    if lowered in lexicon.section_headers:
        return True
    if _is_all_caps_heading(text):
        return True
    if (
        len(text) >= HEADER_MAX_LENGTH
        or len(text.split()) > HEADER_MAX_WORDS
        or ":" in text
        or "." in text
        or any(ch.isdigit() for ch in text)
        or _BULLET_START_RE.match(text)
    ):
        return False
    return lexicon.header_pattern.search(lowered) is not None


def _is_all_caps_heading(text: str) -> bool:
    # A single upper-case word is a header only through the vocabulary.
    letters = [ch for ch in text if ch.isalpha()]
    words = text.split()
    return (
        len(letters) >= 3
        and CAPS_HEADER_MIN_WORDS <= len(words) <= CAPS_HEADER_MAX_WORDS
        and text.isupper()
        and len(text) <= CAPS_HEADER_MAX_LENGTH
        and not any(ch.isdigit() for ch in text)
        and all(ch.isalpha() or ch in " &/-" for ch in text)
    )


def is_job_title(line: str, next_line: str, lexicon: Lexicon) -> bool:
    if _BULLET_START_RE.match(line):
        return False
    dated = has_date_pattern(line)
    if lexicon.role_pattern.search(line) and (dated or has_date_pattern(next_line)):
        return True
    return dated and DATED_TITLE_MIN_LENGTH <= len(line) <= DATED_TITLE_MAX_LENGTH


def is_company_name(line: str, previous: LineKind | None, lexicon: Lexicon) -> bool:
    if (
        len(line) > COMPANY_MAX_LENGTH
        or _BULLET_START_RE.match(line)
        or has_date_pattern(line)
        or is_contact_info(line)
    ):
        return False
    if lexicon.organization_pattern.search(line):
        return True
    return (
        isinstance(previous, JobTitle)
        and len(line.split()) <= COMPANY_MAX_WORDS
        and not line.endswith(".")
        and not _LABEL_RE.match(line)
        and not _INLINE_BULLET_RE.search(line)
    )


def bullet_items(line: str) -> tuple[str, ...] | None:
    """Split a bullet line into items, or None when the line is not a bullet."""
    if _BULLET_START_RE.match(line):
        body = _LEADING_BULLET_RE.sub("", line, count=1)
    elif _LABEL_RE.match(line):
        body = line
    elif _INLINE_BULLET_RE.search(line):
        body = line
    else:
        return None
    items = tuple(
        collapse_whitespace(part) for part in _INLINE_BULLET_RE.split(body) if part.strip()
    )
    return items or None


def is_contact_info(line: str) -> bool:
    if len(line) > CONTACT_MAX_LENGTH:
        return False
    if EMAIL_RE.search(line) or PROFILE_URL_RE.search(line):
        return True
    return any(is_phone_number(match.group(0)) for match in PHONE_RE.finditer(line))


def classify_line(
    line: str,
    next_line: str,
    previous: LineKind | None,
    lexicon: Lexicon,
) -> LineKind:
    """Classify one trimmed, non-blank line."""
    text = collapse_whitespace(line)
    if is_section_header(text, lexicon):
        return SectionHeader(text.rstrip(":").strip())
    if is_job_title(text, next_line, lexicon):
        return JobTitle(text)
    if is_company_name(text, previous, lexicon):
        return CompanyName(text)
    items = bullet_items(text)
    if items is not None:
        return Bullet(items)
    if is_contact_info(text):
        return ContactInfo(text)
    return Plain(text)
