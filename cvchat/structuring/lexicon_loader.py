"""Loads and validates the keyword lexicon used by the structuring heuristics."""

import json
from pathlib import Path
from typing import Any

from cvchat.structuring.exceptions import LexiconError
from cvchat.structuring.models import Lexicon, PromptRule, SectionFlag

_DEFAULT_LEXICON_PATH = Path(__file__).parent / "lexicon" / "default_lexicon.json"

_REQUIRED_FIELDS = (
    "section_headers",
    "role_keywords",
    "organization_keywords",
    "section_flags",
    "prompt_rules",
)


def load_lexicon(path: Path | None = None) -> Lexicon:
    """Load a lexicon from a JSON file.

    Args:
        path: Path to the lexicon file.
              Defaults to the bundled default_lexicon.json.

    Raises:
        LexiconError: if the file cannot be read, is not JSON, or fails validation.
    """
    if path is None:
        path = _DEFAULT_LEXICON_PATH
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LexiconError(f"Failed to load lexicon: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LexiconError(f"Invalid lexicon JSON in {path}: {exc}") from exc
    return build_lexicon(data)


def build_lexicon(data: Any) -> Lexicon:
    """Validate parsed lexicon JSON and build a Lexicon.

    Raises:
        LexiconError: on any validation failure.
    """
    if not isinstance(data, dict):
        raise LexiconError("Lexicon must be a JSON object")
    for name in _REQUIRED_FIELDS:
        if name not in data:
            raise LexiconError(f"Missing required lexicon field: {name}")
    return Lexicon(
        section_headers=_lowered_terms(data["section_headers"], "section_headers"),
        role_keywords=_lowered_terms(data["role_keywords"], "role_keywords"),
        organization_keywords=_lowered_terms(
            data["organization_keywords"], "organization_keywords"
        ),
        section_flags=_build_section_flags(data["section_flags"]),
        prompt_rules=_build_prompt_rules(data["prompt_rules"]),
        cv_indicators=_lowered_terms(data.get("cv_indicators", []), "cv_indicators"),
    )


def _lowered_terms(raw: Any, name: str) -> tuple[str, ...]:
    if not isinstance(raw, list):
        raise LexiconError(f"'{name}' must be a list of strings")
    terms: list[str] = []
    for i, term in enumerate(raw):
        if not isinstance(term, str) or not term.strip():
            raise LexiconError(f"'{name}[{i}]' must be a non-empty string")
        terms.append(term.strip().lower())
    return tuple(terms)


def _parse_flag(raw: Any, where: str) -> SectionFlag:
    try:
        return SectionFlag(raw)
    except ValueError as exc:
        raise LexiconError(
            f"{where}: unknown section flag {raw!r}, "
            f"expected one of {[f.value for f in SectionFlag]}"
        ) from exc


def _build_section_flags(raw: Any) -> tuple[tuple[SectionFlag, tuple[str, ...]], ...]:
    if not isinstance(raw, dict):
        raise LexiconError("'section_flags' must be an object of flag -> keywords")
    table = []
    for key, keywords in raw.items():
        flag = _parse_flag(key, "section_flags")
        table.append((flag, _lowered_terms(keywords, f"section_flags.{key}")))
    return tuple(table)


def _build_prompt_rules(raw: Any) -> tuple[PromptRule, ...]:
    if not isinstance(raw, list):
        raise LexiconError("'prompt_rules' must be a list")
    return tuple(_build_prompt_rule(item, i) for i, item in enumerate(raw))


def _build_prompt_rule(raw: Any, index: int) -> PromptRule:
    where = f"prompt_rules[{index}]"
    if not isinstance(raw, dict):
        raise LexiconError(f"{where} must be an object")
    prompts = raw.get("prompts")
    if not isinstance(prompts, list) or not prompts:
        raise LexiconError(f"{where}: 'prompts' must be a non-empty list")
    for prompt in prompts:
        if not isinstance(prompt, str) or not prompt.strip():
            raise LexiconError(f"{where}: every prompt must be a non-empty string")

    flags_raw = raw.get("flags", [])
    if not isinstance(flags_raw, list):
        raise LexiconError(f"{where}: 'flags' must be a list")
    flags = frozenset(_parse_flag(flag, where) for flag in flags_raw)

    keywords = _lowered_terms(raw.get("keywords", []), f"{where}.keywords")
    requires = _lowered_terms(raw.get("requires", []), f"{where}.requires")
    if requires and not keywords:
        raise LexiconError(f"{where}: 'requires' is only valid together with 'keywords'")

    return PromptRule(
        prompts=tuple(prompt.strip() for prompt in prompts),
        flags=flags,
        keywords=keywords,
        requires=requires,
    )
