import io
from urllib.parse import quote

import qrcode
from django.conf import settings
from qrcode.constants import ERROR_CORRECT_H

FACEBOOK_SHARER_URL = "https://www.facebook.com/sharer/sharer.php"


def storefront_url(username):
    return f"{settings.SITE_URL}/{username}"


def share_text(restaurant_name):
    return f"Visit {restaurant_name} restaurant"


def whatsapp_share_url(restaurant):
    text = f"{share_text(restaurant.name)}\n{storefront_url(restaurant.username)}"
    return f"https://wa.me/?text={quote(text, safe='')}"


def facebook_share_url(restaurant):
    return f"{FACEBOOK_SHARER_URL}?u={quote(storefront_url(restaurant.username), safe='')}"


def share_links(restaurant):
    return {
        "title": restaurant.name,
        "text": share_text(restaurant.name),
        "url": storefront_url(restaurant.username),
        "whatsapp": whatsapp_share_url(restaurant),
        "facebook": facebook_share_url(restaurant),
        "qr_code_filename": qr_filename(restaurant.username),
    }


def qr_filename(username):
    return f"{username}-qr-code.png"


def qr_code_png(data, box_size=10, border=4) -> bytes:
    """
    High error correction QR as PNG bytes, black on white with a
    `border` modules wide quiet zone.
    """
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_H, box_size=box_size, border=border)
    qr.add_data(data)
    qr.make(fit=True)
    image = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
