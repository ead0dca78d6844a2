"""Date-range recognition shared by the line classifiers and the inline decorator."""

import re

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
_DASH = r"\s*(?:[-–—]|to)\s*"
_OPEN_END = r"(?:present|current|now)"

# Longest alternatives first so finditer() takes a whole range over its parts.
DATE_RE = re.compile(
    "|".join(
        (
            rf"\b{_MONTH}\s+\d{{4}}{_DASH}(?:{_MONTH}\s+\d{{4}}|{_OPEN_END})\b",
            rf"\b\d{{1,2}}/\d{{4}}{_DASH}(?:\d{{1,2}}/\d{{4}}|{_OPEN_END})\b",
            rf"\b\d{{4}}{_DASH}(?:\d{{4}}|{_OPEN_END})\b",
            rf"\b{_MONTH}\s+\d{{4}}\b",
        )
    ),
    re.IGNORECASE,
)


def has_date_pattern(line: str) -> bool:
    """True when the line carries a year range, an open-ended range or a month-year."""
    return DATE_RE.search(line) is not None
