import re
from dataclasses import dataclass, field
from enum import StrEnum
from functools import cached_property


class SectionFlag(StrEnum):
    """CV topics detected from structured markdown headers."""

    EXPERIENCE = "experience"
    SKILLS = "skills"
    EDUCATION = "education"
    CERTIFICATIONS = "certifications"
    PROJECTS = "projects"
    ACHIEVEMENTS = "achievements"
    LANGUAGES = "languages"


# Line classification variants.


@dataclass(frozen=True)
class SectionHeader:
    text: str


@dataclass(frozen=True)
class JobTitle:
    text: str


@dataclass(frozen=True)
class CompanyName:
    text: str


@dataclass(frozen=True)
class Bullet:
    items: tuple[str, ...]


@dataclass(frozen=True)
class ContactInfo:
    text: str


@dataclass(frozen=True)
class Plain:
    text: str


LineKind = SectionHeader | JobTitle | CompanyName | Bullet | ContactInfo | Plain


def whole_word_pattern(terms: tuple[str, ...]) -> re.Pattern[str]:
    """Compile a case-insensitive alternation matching any term as a whole word."""
    if not terms:
        return re.compile(r"(?!x)x")
    ordered = sorted(terms, key=len, reverse=True)
    alternation = "|".join(re.escape(term) for term in ordered)
    return re.compile(rf"(?<!\w)(?:{alternation})(?!\w)", re.IGNORECASE)


@dataclass(frozen=True)
class PromptRule:
    """One row of the prompt rule table.

    A rule without flags or keywords always fires. Otherwise it fires when any of
    its flags was detected, or when one of its keywords occurs in the text and, if
    `requires` is set, one of those co-occurring terms occurs too.
    """

    prompts: tuple[str, ...]
    flags: frozenset[SectionFlag] = frozenset()
    keywords: tuple[str, ...] = ()
    requires: tuple[str, ...] = ()

    @cached_property
    def keyword_pattern(self) -> re.Pattern[str]:
        return whole_word_pattern(self.keywords)

    @cached_property
    def requires_pattern(self) -> re.Pattern[str]:
        return whole_word_pattern(self.requires)

    @property
    def is_unconditional(self) -> bool:
        return not self.flags and not self.keywords

    def fires(self, lowered_text: str, flags: frozenset[SectionFlag]) -> bool:
        if self.is_unconditional:
            return True
        if self.flags & flags:
            return True
        if not self.keywords or not self.keyword_pattern.search(lowered_text):
            return False
        return not self.requires or bool(self.requires_pattern.search(lowered_text))


@dataclass(frozen=True)
class Lexicon:
    """Keyword tables driving the structuring and prompt heuristics."""

    section_headers: tuple[str, ...]
    role_keywords: tuple[str, ...]
    organization_keywords: tuple[str, ...]
    section_flags: tuple[tuple[SectionFlag, tuple[str, ...]], ...]
    prompt_rules: tuple[PromptRule, ...]
    cv_indicators: tuple[str, ...] = ()

    @cached_property
    def header_pattern(self) -> re.Pattern[str]:
        return whole_word_pattern(self.section_headers)

    @cached_property
    def role_pattern(self) -> re.Pattern[str]:
        return whole_word_pattern(self.role_keywords)

    @cached_property
    def organization_pattern(self) -> re.Pattern[str]:
        return whole_word_pattern(self.organization_keywords)


@dataclass(frozen=True)
class StructuredCv:
    """Output of the in-memory structuring pipeline."""

    markdown: str
    flags: frozenset[SectionFlag] = frozenset()
    prompts: list[str] = field(default_factory=list)
