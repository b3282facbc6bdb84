"""Text <-> Base64 conversion."""

from __future__ import annotations

import base64
import binascii
import re
from enum import Enum

_ALPHABET_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
_WHITESPACE_RE = re.compile(r"[\t\n\f\r ]+")


class CodecMode(str, Enum):
    """Direction of a conversion."""

    ENCODE = "encode"
    DECODE = "decode"


class CodecError(ValueError):
    """Raised when text cannot be encoded or decoded."""

    def __init__(self, mode: CodecMode, message: str) -> None:
        super().__init__(message)
        self.mode = mode


def encode(text: str) -> str:
    """Return the Base64 form of the UTF-8 bytes of ``text``."""
    try:
        raw = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise CodecError(CodecMode.ENCODE, f"Text is not UTF-8 representable: {exc.reason}") from exc
    return base64.b64encode(raw).decode("ascii")


def _normalize_padding(text: str) -> str:
    # Mirrors atob: whitespace is ignored and missing padding is accepted.
    compact = _WHITESPACE_RE.sub("", text)
    if not _ALPHABET_RE.match(compact):
        raise CodecError(CodecMode.DECODE, "Input contains characters outside the Base64 alphabet")

    data = compact.rstrip("=")
    if not data:
        raise CodecError(CodecMode.DECODE, "Input holds no Base64 data")
    if len(compact) % 4 and len(compact) != len(data):
        raise CodecError(CodecMode.DECODE, "Input has misplaced padding")
    if len(data) % 4 == 1:
        raise CodecError(CodecMode.DECODE, "Input length is not valid Base64")
    return data + "=" * (-len(data) % 4)


def decode(text: str) -> str:
    """Return the text whose UTF-8 bytes are Base64-encoded in ``text``."""
    padded = _normalize_padding(text)
    try:
        raw = base64.b64decode(padded, validate=True)
    except binascii.Error as exc:
        raise CodecError(CodecMode.DECODE, f"Invalid Base64: {exc}") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CodecError(CodecMode.DECODE, "Decoded bytes are not valid UTF-8") from exc


def convert(mode: CodecMode, text: str) -> str:
    """Run the conversion selected by ``mode``."""
    if CodecMode(mode) is CodecMode.ENCODE:
        return encode(text)
    return decode(text)
