"""
Text recognition with the Google Cloud Vision API.

Usage:
- Set up Google Cloud credentials:
  * Create a service account in Google Cloud Console.
  * Download JSON key and set GOOGLE_CLOUD_CREDENTIALS env var or GOOGLE_APPLICATION_CREDENTIALS.
- Call recognize_text(image_bytes) to get the full recognized text.

Note: This module checks for the google.cloud.vision package and credentials
at call time. If either is missing, it raises OCRFailure so the router can
move on to the next provider.
"""
import os
import logging

try:
    from google.cloud import vision
    from google.api_core import exceptions as gcp_exceptions
    from google.auth import exceptions as auth_exceptions
except ImportError:
    vision = None
    gcp_exceptions = None
    auth_exceptions = None

from exceptions import OCRFailure

logger = logging.getLogger(__name__)


def credentials_configured() -> bool:
    """Check for explicit credentials path or default Google Application Credentials"""
    creds_path = os.getenv("GOOGLE_CLOUD_CREDENTIALS")
    if creds_path and os.path.exists(creds_path):
        os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = creds_path
        return True
    return bool(os.getenv("GOOGLE_APPLICATION_CREDENTIALS"))


def is_available() -> bool:
    return vision is not None and credentials_configured()


def recognize_text(image_bytes: bytes) -> str:
    """
    Recognize all text on an image.

    Args:
        image_bytes: Encoded image (PNG, JPEG, GIF, BMP, WebP, TIFF).

    Returns:
        The full text of the first text annotation, or "" when the image
        holds no text.

    Raises:
        OCRFailure: library missing, credentials missing or API error.
    """
    if vision is None:
        logger.error("google.cloud.vision package not installed. Install with `pip install google-cloud-vision`")
        raise OCRFailure("google.cloud.vision package not installed")

    if not credentials_configured():
        logger.error(
            "Google Cloud credentials not found. Set GOOGLE_APPLICATION_CREDENTIALS env var "
            "or GOOGLE_CLOUD_CREDENTIALS pointing to your service account JSON."
        )
        raise OCRFailure("Google Cloud credentials not configured")

    try:
        client = vision.ImageAnnotatorClient()
        image = vision.Image(content=image_bytes)

        logger.info("Calling Google Cloud Vision text detection (%d bytes)", len(image_bytes))
        response = client.text_detection(image=image)
    except (gcp_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
        logger.exception("Google Cloud Vision API error: %s", e)
        raise OCRFailure(f"API error: {e}") from e
    except Exception as e:
        # e.g. a malformed credentials file rejected while building the client
        logger.exception("Google Cloud Vision client failed: %s", e)
        raise OCRFailure(f"Client error: {e}") from e

    if response.error and response.error.message:
        logger.error("Google Cloud Vision returned an error: %s", response.error.message)
        raise OCRFailure(f"API error: {response.error.message}")

    if not response.text_annotations:
        logger.info("No text found on image")
        return ""

    text = response.text_annotations[0].description
    logger.info("Extracted text from image: %d characters", len(text))
    return text


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Recognize text on an image with Google Cloud Vision")
    parser.add_argument("image", help="Path to image file")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    with open(args.image, "rb") as f:
        print(recognize_text(f.read()))
