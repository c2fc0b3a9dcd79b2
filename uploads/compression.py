import io

from django.conf import settings
from PIL import Image, ImageOps, UnidentifiedImageError


class InvalidImage(ValueError):
    pass


def compress_image(file_obj, max_dimension=None, quality=None, on_progress=None):
    """
    Re-encode an uploaded image as an RGB JPEG no larger than `max_dimension`
    on its longest side. Returns the encoded bytes.
    """
    max_dimension = max_dimension or settings.IMAGE_MAX_DIMENSION
    quality = quality or settings.IMAGE_QUALITY
    report = on_progress or (lambda pct: None)

    try:
        image = Image.open(file_obj)
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidImage("File is not a valid image") from exc
    except Image.DecompressionBombError as exc:
        raise InvalidImage("Image is too large") from exc
    report(25)

    image = ImageOps.exif_transpose(image)
    if image.mode != "RGB":
        # flatten transparency on white, jpeg has no alpha
        if image.mode in ("RGBA", "LA", "P"):
            image = image.convert("RGBA")
            background = Image.new("RGB", image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[-1])
            image = background
        else:
            image = image.convert("RGB")
    report(50)

    image.thumbnail((max_dimension, max_dimension), Image.LANCZOS)
    report(75)

    out = io.BytesIO()
    image.save(out, format="JPEG", quality=quality, optimize=True)
    report(100)
    return out.getvalue()
