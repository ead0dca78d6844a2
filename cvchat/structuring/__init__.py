from cvchat.structuring.lexicon_loader import load_lexicon
from cvchat.structuring.markdown import structure
from cvchat.structuring.models import Lexicon, SectionFlag, StructuredCv
from cvchat.structuring.prompts import generate_prompts, looks_like_cv
from cvchat.structuring.repair import repair
from cvchat.structuring.sections import extract_sections
from cvchat.structuring.structurer import CvStructurer

__all__ = [
    "CvStructurer",
    "Lexicon",
    "SectionFlag",
    "StructuredCv",
    "extract_sections",
    "generate_prompts",
    "load_lexicon",
    "looks_like_cv",
    "repair",
    "structure",
]
