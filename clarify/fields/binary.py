"""Byte strings encoded as hexadecimal or unpadded URL-safe base64 text."""

from __future__ import annotations

import base64
import binascii
import re

__all__ = ["Hexadecimal", "HexadecimalNullZero", "Base64", "Base64NullZero"]

_BASE64_URL = re.compile(r"[A-Za-z0-9_-]*")


def _expect_text(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {type(value).__name__}")
    return value


class Hexadecimal(bytes):
    """Bytes that encode as a lower-case hexadecimal string."""

    __slots__ = ()

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({bytes(self)!r})"

    def to_json(self) -> str | None:
        return self.hex()

    @classmethod
    def from_json(cls, value: object) -> Hexadecimal:
        """Decode a hexadecimal string; JSON null gives empty bytes."""
        if value is None:
            return cls()
        text = _expect_text(value)
        try:
            return cls(binascii.unhexlify(text))
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"invalid hexadecimal string {text!r}: {exc}") from exc


class HexadecimalNullZero(Hexadecimal):
    """Hexadecimal bytes whose empty value is encoded as JSON null."""

    __slots__ = ()

    def to_json(self) -> str | None:
        if not self:
            return None
        return super().to_json()


def _encode_base64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _decode_base64(text: str) -> bytes:
    if not _BASE64_URL.fullmatch(text) or len(text) % 4 == 1:
        raise ValueError(f"invalid unpadded URL-safe base64 string {text!r}")
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


class Base64(bytes):
    """Bytes that encode as unpadded URL-safe base64 (RFC 4648)."""

    __slots__ = ()

    def __str__(self) -> str:
        return _encode_base64(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({bytes(self)!r})"

    def to_json(self) -> str | None:
        return _encode_base64(self)

    @classmethod
    def from_json(cls, value: object) -> Base64:
        """Decode an unpadded URL-safe base64 string; JSON null gives empty bytes."""
        if value is None:
            return cls()
        return cls(_decode_base64(_expect_text(value)))


class Base64NullZero(Base64):
    """Base64 bytes whose empty value is encoded as JSON null."""

    __slots__ = ()

    def to_json(self) -> str | None:
        if not self:
            return None
        return super().to_json()