"""
Multi-vision orchestrator: routes text recognition to Google Vision or
Tesseract, with PDF text-layer shortcut and ordered fallback.

Usage:
    from multi_vision import recognize_text

    text = recognize_text(file_bytes, filename="drawing.pdf")  # Tries Google, falls back to Tesseract
"""
import logging
from typing import Callable, Dict, List, Optional

import config
import google_vision
import tesseract_ocr
from exceptions import OCRFailure
from pdf_processor import extract_pdf_text, is_pdf, render_first_page

logger = logging.getLogger(__name__)

PROVIDERS: Dict[str, Callable[[bytes], str]] = {
    "google": google_vision.recognize_text,
    "tesseract": tesseract_ocr.recognize_text,
}


def _enabled(provider: str) -> bool:
    if provider == "google":
        return config.ENABLE_GOOGLE_VISION
    if provider == "tesseract":
        return config.ENABLE_TESSERACT
    return False


def configured_providers() -> List[str]:
    """Enabled providers in configured order; unknown names are ignored."""
    providers = []
    for name in config.OCR_PROVIDERS:
        if name not in PROVIDERS:
            logger.warning("Unknown OCR provider in configuration: %s", name)
            continue
        if _enabled(name):
            providers.append(name)
    return providers


def _run_providers(image_bytes: bytes, providers: List[str]) -> str:
    successes = 0
    errors = []
    for provider in providers:
        try:
            text = PROVIDERS[provider](image_bytes)
        except OCRFailure as e:
            logger.warning("%s OCR failed: %s", provider, e)
            errors.append(f"{provider}: {e}")
            continue
        successes += 1
        if text and text.strip():
            logger.info("Text recognized by %s (%d characters)", provider, len(text))
            return text
        logger.info("%s returned no text, trying next provider", provider)

    if successes:
        logger.warning("No provider recognized any text")
        return ""
    if not providers:
        raise OCRFailure("No OCR provider enabled")
    raise OCRFailure("All OCR providers failed: " + "; ".join(errors))


def recognize_text(file_bytes: bytes, filename: Optional[str] = None,
                   providers: Optional[List[str]] = None) -> str:
    """
    Recognize the text of an uploaded drawing.

    Args:
        file_bytes: PDF or image payload.
        filename: Original filename, used to detect PDFs.
        providers: Provider names to try in order; configured order if None.

    Returns:
        Recognized text, possibly empty if providers ran but found nothing.

    Raises:
        OCRFailure: the file could not be read or every provider failed.
    """
    if not file_bytes:
        raise OCRFailure("Empty file")

    image_bytes = file_bytes
    if is_pdf(file_bytes, filename):
        text = extract_pdf_text(file_bytes)
        if len(text.strip()) >= config.MIN_PDF_TEXT_CHARS:
            logger.info("Using embedded PDF text, OCR skipped")
            return text
        logger.info("PDF text layer too short, rasterizing first page for OCR")
        image_bytes = render_first_page(file_bytes, dpi=config.PDF_RENDER_DPI)

    if providers is None:
        providers = configured_providers()
    return _run_providers(image_bytes, providers)


def get_provider_status() -> Dict[str, bool]:
    """Return availability status of each OCR provider."""
    return {
        "google_vision": config.ENABLE_GOOGLE_VISION and google_vision.is_available(),
        "tesseract": config.ENABLE_TESSERACT and tesseract_ocr.is_available(),
    }


if __name__ == "__main__":
    import argparse
    import json

    parser = argparse.ArgumentParser(description="Recognize the text of an engineering drawing")
    parser.add_argument("file", help="Path to PDF or image file")
    parser.add_argument("-p", "--provider", choices=sorted(PROVIDERS), help="Use only this provider")

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    print("OCR Provider Status:", json.dumps(get_provider_status(), indent=2))
    with open(args.file, "rb") as f:
        data = f.read()
    text = recognize_text(data, filename=args.file, providers=[args.provider] if args.provider else None)
    print(text or "No text extracted")
