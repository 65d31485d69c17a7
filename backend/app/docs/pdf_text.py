"""PDF text extraction using pypdf."""

import io
import logging

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from backend.app.errors import TextExtractionError

logger = logging.getLogger(__name__)


def extract_pdf_text(data: bytes) -> str:
    """Extract plain text from PDF bytes, pages joined by blank lines.

    Raises:
        TextExtractionError: If the bytes are not a readable PDF
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PyPdfError, ValueError, OSError) as e:
        logger.error(f"PDF extraction failed: {e}")
        raise TextExtractionError("Failed to read PDF") from e

    return "\n\n".join(text for text in pages if text.strip())
