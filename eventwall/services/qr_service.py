"""QR codes pointing guests at the upload page."""

import io
from urllib.parse import urlencode

import qrcode

from eventwall.core.config import get_settings

settings = get_settings()


def build_upload_url(base_url: str, event_id: int | None = None) -> str:
    """Public upload page URL, scoped to one event when given."""
    base = (settings.public_base_url or base_url).rstrip("/")
    url = f"{base}{settings.upload_page_path}"
    if event_id is not None:
        url = f"{url}?{urlencode({'eventId': event_id})}"
    return url


def render_png(data: str) -> bytes:
    qr_image = qrcode.make(data)
    buffer = io.BytesIO()
    qr_image.save(buffer, format="PNG")
    return buffer.getvalue()
