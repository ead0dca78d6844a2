from cvchat.logging.logger import Log
from cvchat.structuring.markdown import structure
from cvchat.structuring.models import Lexicon, SectionFlag, StructuredCv
from cvchat.structuring.prompts import DEFAULT_MAX_PROMPTS, generate_prompts, looks_like_cv
from cvchat.structuring.repair import repair
from cvchat.structuring.sections import extract_sections


class CvStructurer:
    """Binds the structuring heuristics to one lexicon and prompt cap."""

    def __init__(self, lexicon: Lexicon, max_prompts: int = DEFAULT_MAX_PROMPTS) -> None:
        self._lexicon = lexicon
        self._max_prompts = max_prompts

    def repair(self, raw_text: str) -> str:
        return repair(raw_text)

    def to_markdown(self, repaired_text: str) -> str:
        markdown = structure(repaired_text, self._lexicon)
        if not looks_like_cv(markdown, self._lexicon):
            Log.warning("Document does not look like a CV", chars=len(markdown))
        return markdown

    def sections(self, markdown: str) -> frozenset[SectionFlag]:
        return extract_sections(markdown, self._lexicon)

    def prompts(self, markdown: str, flags: frozenset[SectionFlag]) -> list[str]:
        return generate_prompts(markdown, flags, self._lexicon, self._max_prompts)

    def build(self, raw_text: str) -> StructuredCv:
        """Run repair -> markdown -> section flags -> prompts in one call."""
        markdown = self.to_markdown(self.repair(raw_text))
        flags = self.sections(markdown)
        return StructuredCv(markdown=markdown, flags=flags, prompts=self.prompts(markdown, flags))
