# pdf_processor.py
"""
PDF helpers: detect PDFs, read the embedded text layer and rasterize the
first page for OCR. Uses PyMuPDF.
"""
import os
import logging

import fitz  # PyMuPDF

from exceptions import OCRFailure

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


def is_pdf(data: bytes, filename=None) -> bool:
    """True when the payload starts with the PDF magic or the filename ends in .pdf"""
    if data and data.lstrip()[:4] == PDF_MAGIC:
        return True
    return bool(filename) and os.path.splitext(filename)[1].lower() == ".pdf"


def _open(pdf_bytes):
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        logger.error(f"Could not open PDF: {e}")
        raise OCRFailure(f"Invalid PDF: {e}") from e
    if not doc.page_count:
        doc.close()
        raise OCRFailure("Invalid or empty PDF")
    return doc


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Return the embedded text of all pages, joined by newlines."""
    doc = _open(pdf_bytes)
    try:
        pages = [page.get_text() for page in doc]
    finally:
        doc.close()
    text = "\n".join(pages)
    logger.info(f"PDF text layer: {len(text.strip())} characters on {len(pages)} pages")
    return text


def render_first_page(pdf_bytes: bytes, dpi: int = 200) -> bytes:
    """Rasterize the first page to PNG bytes."""
    doc = _open(pdf_bytes)
    try:
        page = doc[0]
        zoom = dpi / 72.0
        mat = fitz.Matrix(zoom, zoom)
        pix = page.get_pixmap(matrix=mat, alpha=False)
        img_data = pix.tobytes(output="png")
        logger.info(f"Rendered first PDF page at {dpi} dpi ({pix.width}x{pix.height})")
    finally:
        doc.close()
    return img_data
