import pytest

from cvchat.structuring.models import Lexicon, SectionFlag
from cvchat.structuring.sections import extract_sections


@pytest.mark.parametrize(
    ("markdown", "expected"),
    [
        ("## EXPERIENCE", {SectionFlag.EXPERIENCE}),
        ("## WORK HISTORY", {SectionFlag.EXPERIENCE}),
        ("## TECHNICAL SKILLS", {SectionFlag.SKILLS}),
        ("# Skills", {SectionFlag.SKILLS}),
        ("## ACADEMIC BACKGROUND", {SectionFlag.EDUCATION}),
        ("## QUALIFICATIONS", {SectionFlag.EDUCATION}),
        ("## CERTIFICATIONS", {SectionFlag.CERTIFICATIONS}),
        ("## PROJECTS", {SectionFlag.PROJECTS}),
        ("## AWARDS", {SectionFlag.ACHIEVEMENTS}),
        ("## LANGUAGES", {SectionFlag.LANGUAGES}),
        ("## HOBBIES", set()),
    ],
)
def test_maps_header_to_flag(lexicon: Lexicon, markdown: str, expected: set[SectionFlag]) -> None:
    assert extract_sections(markdown, lexicon) == frozenset(expected)


def test_collects_flags_across_headers(lexicon: Lexicon) -> None:
    markdown = "## EXPERIENCE\n\n- Did things\n\n## EDUCATION\n\nBS Computer Science"
    assert extract_sections(markdown, lexicon) == {SectionFlag.EXPERIENCE, SectionFlag.EDUCATION}


def test_duplicate_headers_give_one_flag(lexicon: Lexicon) -> None:
    assert extract_sections("## Skills\n## Technical Skills", lexicon) == {SectionFlag.SKILLS}


def test_each_header_sets_at_most_one_flag(lexicon: Lexicon) -> None:
    # Matches both experience and projects keywords; the first table entry wins.
    assert extract_sections("## PROJECT EXPERIENCE", lexicon) == {SectionFlag.EXPERIENCE}


def test_job_title_headings_are_ignored(lexicon: Lexicon) -> None:
    assert extract_sections("### Technical Skills Lead", lexicon) == frozenset()


def test_body_text_is_ignored(lexicon: Lexicon) -> None:
    assert extract_sections("I have experience with Python", lexicon) == frozenset()
