"""Decode key material according to a site's declared encoding."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from cryptography.hazmat.primitives.serialization import load_pem_public_key

from .algorithms import AlgorithmFamily
from .exceptions import KeyDecodeError, KeySourceUnreadable, UnsupportedEncoding
from .keysource import KeySource

ENCODINGS = {
    "pem": AlgorithmFamily.RSA,
    "base64": AlgorithmFamily.HMAC,
    "plain": AlgorithmFamily.HMAC,
}


@dataclass(frozen=True)
class RsaPublicKey:
    """Parsed RSA public key for the RSA family."""

    key: RSAPublicKey = field(repr=False)


@dataclass(frozen=True)
class HmacSecret:
    """Raw shared secret for the HMAC family."""

    secret: bytes = field(repr=False)


KeyMaterial = Union[RsaPublicKey, HmacSecret]


def _normalize_armor(text: str) -> bytes:
    # Inline keys are usually indented inside the settings document.
    lines = [line.strip() for line in text.strip().splitlines()]
    return ("\n".join(line for line in lines if line) + "\n").encode("ascii")


def decode_pem_public_key(text: str) -> RsaPublicKey:
    """Parse armored X.509 public key text into an RSA public key."""
    try:
        key = load_pem_public_key(_normalize_armor(text))
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyDecodeError(f"Error loading public key: {e}") from e
    if not isinstance(key, RSAPublicKey):
        raise KeyDecodeError(f"Expected an RSA public key, got {type(key).__name__}")
    return RsaPublicKey(key)


def decode_base64_secret(raw: bytes) -> HmacSecret:
    try:
        secret = base64.b64decode(raw.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise KeyDecodeError(f"Base64 decode error: {e}") from e
    return HmacSecret(secret)


def decode_key_material(
    family: AlgorithmFamily, encoding: str, source: KeySource
) -> KeyMaterial:
    """Read ``source`` and decode it for ``family`` using ``encoding``.

    Raises:
        UnsupportedEncoding: ``encoding`` is not pem, base64 or plain.
        KeyDecodeError: The encoding does not apply to ``family`` or the
            material is malformed.
        KeySourceUnreadable: The key file could not be read.
    """

    name = (encoding or "").lower()
    if name not in ENCODINGS:
        raise UnsupportedEncoding(f"Unsupported key encoding: {encoding!r}")
    if ENCODINGS[name] is not family:
        raise KeyDecodeError(
            f"Encoding {name!r} cannot be used with {family.value} algorithms"
        )

    try:
        if name == "pem":
            return decode_pem_public_key(source.read_text())
        raw = source.read_bytes()
    except UnicodeDecodeError as e:
        raise KeyDecodeError(f"Key text is not valid UTF-8: {e}") from e
    except OSError as e:
        raise KeySourceUnreadable(f"Unable to read {source.describe()}: {e}") from e

    material = decode_base64_secret(raw) if name == "base64" else HmacSecret(raw)
    if not material.secret:
        raise KeyDecodeError("Decoded secret is empty")
    return material


__all__ = [
    "ENCODINGS",
    "HmacSecret",
    "KeyMaterial",
    "RsaPublicKey",
    "decode_base64_secret",
    "decode_key_material",
    "decode_pem_public_key",
]
