from cvchat.processor.exceptions import ExtractionError


class PdfExtractionError(ExtractionError):
    """Raised when a PDF adapter cannot read the document."""
