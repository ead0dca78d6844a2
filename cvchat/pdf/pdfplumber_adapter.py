import io

import pdfplumber

from cvchat.pdf.base import BasePdfExtractor
from cvchat.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def __init__(self, x_tolerance: float = 1.5) -> None:
        # Characters closer than x_tolerance are joined into one word.
        self._x_tolerance = x_tolerance

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [
                    page.extract_text(x_tolerance=self._x_tolerance) or ""
                    for page in pdf.pages
                ]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return "\n".join(pages).strip()
