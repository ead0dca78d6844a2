class StructuringError(Exception):
    """Base exception for the text structuring heuristics."""


class LexiconError(StructuringError):
    """Raised when a lexicon file cannot be loaded or fails validation."""
