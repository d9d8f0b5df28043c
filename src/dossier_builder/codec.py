"""
Text-safe transport for binary payloads (uploaded PDFs, radar PNGs).

Payloads are stored as plain base64 inside the JSON data model.  Values read
back may carry a data-URI prefix (``data:application/pdf;base64,``) because
browsers hand files over that way; the prefix is stripped before decoding.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Union

PDF_SIGNATURE = b"%PDF-"

_WHITESPACE = re.compile(r"\s+")


def encode_payload(data: bytes) -> str:
    """Encode raw bytes for storage (no prefix)."""
    return base64.b64encode(bytes(data)).decode("ascii")


def decode_payload(text: Union[str, bytes]) -> bytes:
    """
    Inverse of ``encode_payload``.  Accepts an optional ``…,`` prefix and
    ignores embedded whitespace / line breaks.

    Raises ``ValueError`` for input that is not valid base64.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("ascii", errors="strict")
    if "," in text:
        text = text.split(",", 1)[1]
    text = _WHITESPACE.sub("", text)
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"payload is not valid base64: {exc}") from exc


def decoded_size(text: Union[str, bytes]) -> int:
    """
    Byte length ``decode_payload`` would return, computed from the encoded
    length alone.  Lets size limits be enforced before anything is decoded.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("ascii", errors="replace")
    start = text.find(",") + 1
    length = len(text) - start - sum(text.count(c, start) for c in " \t\r\n")
    padding = text[-4:].rstrip()[-2:].count("=")
    return max(0, length * 3 // 4 - padding)


def to_data_uri(data: bytes, mime: str = "application/pdf") -> str:
    return f"data:{mime};base64,{encode_payload(data)}"


def is_pdf(data: bytes) -> bool:
    # the signature may follow a few bytes of junk (allowed within the first KB)
    return PDF_SIGNATURE in bytes(data[:1024])
