from PIL import Image, ImageEnhance, ImageOps
import logging

logger = logging.getLogger(__name__)

MIN_OCR_WIDTH = 1500


def optimize_image_for_ocr(image):
    """
    Enhance a scanned drawing before running Tesseract on it.

    Args:
        image (PIL.Image): Input image to optimize

    Returns:
        PIL.Image: Grayscale image with enhanced contrast and sharpness
    """
    try:
        # Only upscale if image is too small for reliable glyph recognition
        if image.width < MIN_OCR_WIDTH:
            new_width = MIN_OCR_WIDTH
            new_height = int(new_width * (image.height / image.width))
            image = image.resize((new_width, new_height), Image.Resampling.LANCZOS)

        # Tesseract works on luminance only
        image = ImageOps.grayscale(image)

        # Enhance contrast
        image = ImageEnhance.Contrast(image).enhance(1.5)

        # Sharpen image
        image = ImageEnhance.Sharpness(image).enhance(1.2)

        return image
    except (OSError, ValueError) as e:
        logger.warning(f"Image optimization failed: {e}")
        return image  # Return original image if optimization fails
