"""Image resizing utilities"""

from io import BytesIO

from PIL import Image

from files_manager.utils.logger import get_logger

logger = get_logger(__name__)

# Formats Pillow can open but not write back
FALLBACK_FORMAT = "PNG"


def generate_thumbnail(data: bytes, width: int) -> bytes:
    """
    Resize an image to the given width, keeping its aspect ratio

    Args:
        data: Encoded source image
        width: Target width in pixels

    Returns:
        Encoded resized image, in the source format when Pillow can write it

    Raises:
        PIL.UnidentifiedImageError: if data is not an image
        ValueError: if width is not positive
    """
    if width <= 0:
        raise ValueError(f"Invalid thumbnail width: {width}")

    with Image.open(BytesIO(data)) as img:
        source_format = img.format or FALLBACK_FORMAT
        src_width, src_height = img.size
        height = max(1, round(src_height * width / src_width))

        resized = img.resize((width, height), Image.Resampling.LANCZOS)

        if source_format == "JPEG" and resized.mode in ("RGBA", "LA", "P"):
            # JPEG has no alpha channel: flatten onto white
            background = Image.new("RGB", resized.size, (255, 255, 255))
            if resized.mode == "P":
                resized = resized.convert("RGBA")
            background.paste(resized, mask=resized.split()[-1])
            resized = background

        output = BytesIO()
        try:
            resized.save(output, format=source_format)
        except (KeyError, OSError):
            logger.debug(f"Cannot write {source_format}, saving thumbnail as {FALLBACK_FORMAT}")
            output = BytesIO()
            resized.save(output, format=FALLBACK_FORMAT)

    return output.getvalue()
