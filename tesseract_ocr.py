"""
Local text recognition with Tesseract, used when Google Cloud Vision is
unavailable or returns nothing.
"""
import io
import logging

import pytesseract
from PIL import Image, UnidentifiedImageError

import config
from exceptions import OCRFailure
from image_optimization import optimize_image_for_ocr

logger = logging.getLogger(__name__)

# German and English drawings; languages that are not installed are skipped
TESSERACT_LANG = "deu+eng"


def is_available() -> bool:
    try:
        pytesseract.get_tesseract_version()
        return True
    except (pytesseract.TesseractNotFoundError, OSError):
        return False


def _languages():
    try:
        installed = set(pytesseract.get_languages(config=""))
    except (pytesseract.TesseractError, OSError):
        return "eng"
    wanted = [lang for lang in TESSERACT_LANG.split("+") if lang in installed]
    return "+".join(wanted) or "eng"


def recognize_text(image_bytes: bytes) -> str:
    """
    Recognize text on an encoded image.

    Raises:
        OCRFailure: image cannot be decoded or Tesseract fails.
    """
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        logger.error(f"Could not decode image for Tesseract: {e}")
        raise OCRFailure(f"Invalid image: {e}") from e

    image = optimize_image_for_ocr(image)

    try:
        text = pytesseract.image_to_string(image, lang=_languages(), config=f"--psm {config.TESSERACT_PSM}")
    except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as e:
        logger.error(f"Tesseract OCR failed: {e}")
        raise OCRFailure(f"Tesseract error: {e}") from e

    logger.info(f"Tesseract extracted {len(text.strip())} characters")
    return text
