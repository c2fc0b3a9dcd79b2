"""
Cloudinary media client.
Uploads go through the unsigned upload preset, deletes are signed with the api secret.
"""
import hashlib
import logging
import time

import requests
from django.conf import settings
from ulid import ULID

from .compression import compress_image

logger = logging.getLogger(__name__)

COMPRESSING = "compressing"
UPLOADING = "uploading"
DONE = "done"

# width, height
PRESETS = {
    "cover": (800, 400),
    "logo": (200, 200),
    "thumbnail": (100, 100),
    "medium": (400, 300),
    "large": (600, 450),
}


class MediaUploadError(Exception):
    pass


# ===== PUBLIC IDS =====

def cover_public_id(username):
    return f"restaurants/{username}/cover"


def logo_public_id(username):
    return f"restaurants/{username}/logo"


def menu_item_public_id(username, item_id):
    return f"restaurants/{username}/menu-items/{item_id}"


def unique_public_id(public_id):
    """Suffix so a replaced image never reuses a cached url."""
    return f"{public_id}_{str(ULID()).lower()}"


def split_public_id(public_id):
    """restaurants/x/cover_01h... -> ("restaurants/x", "cover_01h...")"""
    folder, _, filename = public_id.rpartition("/")
    return folder, filename


# ===== DELIVERY URLS =====

def optimized_url(url, width=None, height=None, quality="auto", fmt="auto", crop="fill"):
    if not url or "cloudinary.com" not in url:
        return url or ""

    parts = [f"f_{fmt}", f"q_{quality}"]
    if width:
        parts.append(f"w_{width}")
    if height:
        parts.append(f"h_{height}")
    if width or height:
        parts.append(f"c_{crop}")
    parts.append("dpr_auto")
    return url.replace("/upload/", f"/upload/{','.join(parts)}/", 1)


def preset_url(url, preset):
    width, height = PRESETS[preset]
    return optimized_url(url, width=width, height=height, crop="fill")


def cover_url(url):
    return preset_url(url, "cover")


def logo_url(url):
    return preset_url(url, "logo")


def menu_item_urls(url):
    return {size: preset_url(url, size) for size in ("thumbnail", "medium", "large")}


# ===== API =====

class CloudinaryClient:
    def __init__(self, cloud_name=None, upload_preset=None, api_key=None, api_secret=None,
                 base_url=None, timeout=None):
        cfg = settings.CLOUDINARY
        self.cloud_name = cloud_name or cfg.get("CLOUD_NAME")
        self.upload_preset = upload_preset or cfg.get("UPLOAD_PRESET")
        self.api_key = api_key or cfg.get("API_KEY")
        self.api_secret = api_secret or cfg.get("API_SECRET")
        self.base_url = (base_url or cfg.get("API_BASE_URL")).rstrip("/")
        self.timeout = timeout or settings.MEDIA_UPLOAD_TIMEOUT

    def endpoint(self, action):
        if not self.cloud_name:
            raise MediaUploadError("CLOUDINARY_CLOUD_NAME is not configured")
        return f"{self.base_url}/{self.cloud_name}/image/{action}"

    def sign(self, params):
        """Cloudinary signature: sha1 of sorted `k=v` pairs joined by & plus the secret."""
        payload = "&".join(f"{k}={params[k]}" for k in sorted(params))
        return hashlib.sha1(f"{payload}{self.api_secret}".encode()).hexdigest()

    def upload(self, file_obj, public_id, progress=None):
        """
        Compress then upload. `progress(stage, percent, message)` is called per phase.
        Returns the decoded cloudinary response (secure_url, public_id, ...).
        """
        report = progress or (lambda *args: None)

        report(COMPRESSING, 0, "Compressing image")
        data = compress_image(
            file_obj,
            on_progress=lambda pct: report(COMPRESSING, pct, "Compressing image"),
        )
        report(COMPRESSING, 100, "Image compressed")

        folder, filename = split_public_id(unique_public_id(public_id))
        form = {"upload_preset": self.upload_preset, "public_id": filename}
        if folder:
            form["folder"] = folder

        report(UPLOADING, 0, "Uploading image")
        try:
            resp = requests.post(
                self.endpoint("upload"),
                data=form,
                files={"file": (f"{filename}.jpg", data, "image/jpeg")},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.exception("cloudinary upload request failed for %s", public_id)
            raise MediaUploadError("Image upload failed") from exc

        if not resp.ok:
            logger.error("cloudinary upload failed: %s %s", resp.status_code, resp.text)
            raise MediaUploadError(f"Image upload failed: {resp.status_code}")

        try:
            body = resp.json()
        except ValueError as exc:
            logger.error("cloudinary upload returned a non-json body: %s", resp.text[:200])
            raise MediaUploadError("Image upload failed") from exc
        if body.get("error"):
            raise MediaUploadError(body["error"].get("message", "Image upload failed"))

        report(UPLOADING, 100, "Image uploaded")
        report(DONE, 100, "Done")
        logger.info("uploaded %s (%s bytes)", body.get("public_id"), len(data))
        return body

    def destroy(self, public_id):
        """
        Signed delete. Failures are logged and reported as False, never raised.
        """
        if not public_id:
            return True

        params = {"public_id": public_id, "timestamp": int(time.time())}
        try:
            form = {**params, "api_key": self.api_key, "signature": self.sign(params)}
            resp = requests.post(self.endpoint("destroy"), data=form, timeout=self.timeout)
            resp.raise_for_status()
            result = resp.json().get("result")
        except (requests.RequestException, ValueError, MediaUploadError):
            logger.exception("cloudinary delete failed for %s", public_id)
            return False

        logger.info("cloudinary delete %s: %s", public_id, result)
        return result in ("ok", "not found")
