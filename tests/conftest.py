import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from cvchat.structuring.lexicon_loader import load_lexicon
from cvchat.structuring.models import Lexicon

CV_LINES = [
    "Jane Smith",
    "jane.smith@example.com",
    "EXPERIENCE",
    "Senior Engineer 2019 - 2023",
    "Acme Inc",
    "- Built data pipelines in Python",
    "EDUCATION",
    "BS Computer Science",
    "SKILLS",
    "Python, Docker, Kubernetes",
]


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def cv_pdf_bytes() -> bytes:
    """Generate a one-page CV, one line of CV_LINES per row."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    y = 720
    for line in CV_LINES:
        c.drawString(72, y, line)
        y -= 24
    c.save()
    return buf.getvalue()


@pytest.fixture(scope="session")
def lexicon() -> Lexicon:
    return load_lexicon()
