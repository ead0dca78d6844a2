from abc import ABC, abstractmethod


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract raw text from PDF bytes, one page after another.

        Lines of a page are separated by newlines; pages are joined by a newline.
        No repair or structuring happens here.

        Raises:
            PdfExtractionError: if the document cannot be parsed.
        """
