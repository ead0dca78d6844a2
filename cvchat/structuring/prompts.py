from cvchat.structuring.models import Lexicon, SectionFlag

DEFAULT_MAX_PROMPTS = 15
CV_MIN_LENGTH = 50


def generate_prompts(
    markdown: str,
    flags: frozenset[SectionFlag],
    lexicon: Lexicon,
    max_prompts: int = DEFAULT_MAX_PROMPTS,
) -> list[str]:
    """Suggest chat questions from detected sections and keywords.

    Rules fire in lexicon order; the result keeps that order, drops duplicate
    strings and stops at max_prompts.
    """
    lowered = markdown.lower()
    prompts: list[str] = []
    seen: set[str] = set()
    for rule in lexicon.prompt_rules:
        if not rule.fires(lowered, flags):
            continue
        for prompt in rule.prompts:
            if len(prompts) >= max_prompts:
                return prompts
            if prompt in seen:
                continue
            seen.add(prompt)
            prompts.append(prompt)
    return prompts


def looks_like_cv(text: str, lexicon: Lexicon) -> bool:
    """Cheap sanity check: long enough and mentions at least one CV indicator."""
    if len(text.strip()) < CV_MIN_LENGTH:
        return False
    lowered = text.lower()
    return any(indicator in lowered for indicator in lexicon.cv_indicators)
