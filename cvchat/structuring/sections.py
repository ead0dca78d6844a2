import re

from cvchat.structuring.models import Lexicon, SectionFlag

_HEADER_LINE_RE = re.compile(r"^#{1,2}\s+(.+)$")


def extract_sections(markdown: str, lexicon: Lexicon) -> frozenset[SectionFlag]:
    """Map `#`/`##` header lines to section flags.

    Each header contributes at most one flag: the first table entry with a keyword
    contained in the lowercased header text.
    """
    flags: set[SectionFlag] = set()
    for line in markdown.split("\n"):
        match = _HEADER_LINE_RE.match(line.strip())
        if match is None:
            continue
        header = match.group(1).lower()
        for flag, keywords in lexicon.section_flags:
            if any(keyword in header for keyword in keywords):
                flags.add(flag)
                break
    return frozenset(flags)
