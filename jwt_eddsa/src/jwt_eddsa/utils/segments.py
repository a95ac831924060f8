"""Compact-serialization segment codec."""
from __future__ import annotations

import binascii
import re

from jwt.utils import base64url_decode, base64url_encode

from ..exceptions import MalformedSignatureError

_SEGMENT_RE = re.compile(rb"[A-Za-z0-9_-]*")


def encode_segment(data: bytes) -> str:
    """URL-safe base64 encode without padding"""
    return base64url_encode(data).decode("ascii")


def decode_segment(value: str | bytes) -> bytes:
    """Decode an unpadded base64url segment.

    Unlike :func:`base64.urlsafe_b64decode`, characters outside the base64url
    alphabet are rejected instead of silently discarded.
    """

    if isinstance(value, str):
        try:
            raw = value.encode("ascii")
        except UnicodeEncodeError as exc:
            raise MalformedSignatureError("Segment contains non-ASCII characters") from exc
    else:
        raw = bytes(value)

    if not _SEGMENT_RE.fullmatch(raw):
        raise MalformedSignatureError("Segment contains characters outside the base64url alphabet")
    if len(raw) % 4 == 1:
        raise MalformedSignatureError("Segment has an impossible base64url length")
    try:
        return base64url_decode(raw)
    except (binascii.Error, ValueError) as exc:
        raise MalformedSignatureError(f"Invalid segment encoding: {exc}") from exc


__all__ = ["encode_segment", "decode_segment"]
