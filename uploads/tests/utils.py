import io

from PIL import Image


def image_bytes(size=(40, 20), mode="RGB", fmt="PNG", color=(200, 30, 30)):
    if mode == "RGBA":
        color = color + (0,)
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()
