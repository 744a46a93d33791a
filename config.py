"""
Runtime settings read from the environment.

Every value has a default so the service starts without any configuration;
invalid numbers fall back to the default with a warning.
"""
import os
import logging

logger = logging.getLogger(__name__)


def _env_flag(name, default="true"):
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_int(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}, using {default}")
        return default


def _env_list(name, default):
    raw = os.getenv(name, default)
    return [item.strip().lower() for item in raw.split(",") if item.strip()]


# OCR providers, tried in this order
OCR_PROVIDERS = _env_list("OCR_PROVIDERS", "google,tesseract")
ENABLE_GOOGLE_VISION = _env_flag("ENABLE_GOOGLE_VISION")
ENABLE_TESSERACT = _env_flag("ENABLE_TESSERACT")
TESSERACT_PSM = _env_int("TESSERACT_PSM", 6)

# PDF handling
PDF_RENDER_DPI = _env_int("PDF_RENDER_DPI", 200)
MIN_PDF_TEXT_CHARS = _env_int("MIN_PDF_TEXT_CHARS", 50)

# Pricing
COST_POLICY = os.getenv("COST_POLICY", "amortized").strip().lower()
MATERIAL_TABLE_PATH = os.getenv("MATERIAL_TABLE_PATH") or None

# Web
MAX_UPLOAD_MB = _env_int("MAX_UPLOAD_MB", 16)
PORT = _env_int("PORT", 3001)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ALLOWED_EXTENSIONS = {
    ".pdf", ".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".gif", ".webp",
}
