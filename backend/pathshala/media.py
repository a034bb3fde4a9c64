"""Data URI helpers for media uploaded from the browser or returned by Gemini."""
from __future__ import annotations

import base64
import binascii
import re
from typing import Any, Dict, Tuple

# Upload limits enforced by the worksheet and reading-assessment forms
MAX_IMAGE_BYTES = 4 * 1024 * 1024
MAX_AUDIO_BYTES = 10 * 1024 * 1024

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?:;[^;,]*)*;base64,(?P<data>.*)$", re.DOTALL)


class MediaError(ValueError):
    pass


def parse_data_uri(uri: str) -> Tuple[str, bytes]:
    match = _DATA_URI_RE.match((uri or "").strip())
    if not match:
        raise MediaError("expected a base64 data URI of the form data:<mime>;base64,<data>")
    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as err:
        raise MediaError(f"invalid base64 payload: {err}") from err
    return match.group("mime").lower(), data


def to_data_uri(mime: str, data: bytes) -> str:
    return f"data:{mime};base64," + base64.b64encode(data).decode("ascii")


def check_media_uri(uri: str, *, kind: str, max_bytes: int) -> str:
    """Validate an uploaded data URI's MIME family and decoded size; returns it unchanged.

    Raises ValueError so it can be used from pydantic field validators.
    """
    mime, data = parse_data_uri(uri)
    if not mime.startswith(f"{kind}/"):
        raise MediaError(f"expected {kind}/* media, got {mime}")
    if not data:
        raise MediaError("media payload is empty")
    if len(data) > max_bytes:
        raise MediaError(f"media exceeds {max_bytes // (1024 * 1024)}MB limit")
    return uri


def inline_part(uri: str) -> Dict[str, Any]:
    """Gemini ``inline_data`` part for an uploaded data URI."""
    mime, data = parse_data_uri(uri)
    return {"inline_data": {"mime_type": mime, "data": base64.b64encode(data).decode("ascii")}}
