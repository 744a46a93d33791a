"""
Application startup module with environment verification
"""
import os
import sys
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

REQUIRED_MODULES = [
    'config',
    'drawing_analysis',
    'multi_vision',
    'pdf_processor',
    'excel_output',
]


def verify_environment():
    """Verify all required modules import and report OCR credentials"""
    logger.info("=== Environment Verification ===")
    logger.info(f"Current directory: {os.getcwd()}")
    logger.info(f"Python path: {sys.path}")

    for name in REQUIRED_MODULES:
        try:
            __import__(name)
            logger.info(f"Successfully imported {name}")
        except ImportError as e:
            logger.error(f"Failed to import {name}: {e}")
            raise

    if not (os.getenv("GOOGLE_CLOUD_CREDENTIALS") or os.getenv("GOOGLE_APPLICATION_CREDENTIALS")):
        logger.warning("No Google Cloud credentials configured; OCR will rely on Tesseract")


def create_app():
    """Create and configure the Flask application"""
    verify_environment()

    from app import app
    return app


# This will be used by gunicorn
app = create_app()
