"""Shared fixtures: RSA key pairs, signing helpers and settings writers."""

from __future__ import annotations

import hashlib
import hmac

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

HASHES = {256: hashes.SHA256, 384: hashes.SHA384, 512: hashes.SHA512}
DIGESTS = {256: hashlib.sha256, 384: hashlib.sha384, 512: hashlib.sha512}


def public_pem(private_key) -> str:
    return private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


def sign_rsa(private_key, message: bytes, bits: int = 256) -> bytes:
    return private_key.sign(message, padding.PKCS1v15(), HASHES[bits]())


def sign_hmac(secret: bytes, message: bytes, bits: int = 256) -> bytes:
    return hmac.new(secret, message, DIGESTS[bits]).digest()


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_public_pem(rsa_key) -> str:
    return public_pem(rsa_key)


@pytest.fixture(scope="session")
def ec_public_pem() -> str:
    return public_pem(ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture
def key_file(tmp_path, rsa_public_pem):
    """A readable public key file at ``<tmp_path>/key.pub``."""
    path = tmp_path / "key.pub"
    path.write_text(rsa_public_pem)
    return path


@pytest.fixture
def signer():
    """Signing helpers exposed to tests outside this directory."""

    class Signer:
        rsa = staticmethod(sign_rsa)
        hmac = staticmethod(sign_hmac)
        pem = staticmethod(public_pem)

    return Signer
