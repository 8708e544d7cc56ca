"""Build signature verifiers from decoded key material."""

from __future__ import annotations

from typing import Any, Optional

from jwt.algorithms import Algorithm, HMACAlgorithm, RSAAlgorithm

from .algorithms import VARIANTS, AlgorithmFamily, canonical_variant
from .decoding import HmacSecret, KeyMaterial, RsaPublicKey
from .exceptions import MissingKeyMaterial, UnsupportedVariant

_RSA_HASHES = {
    256: RSAAlgorithm.SHA256,
    384: RSAAlgorithm.SHA384,
    512: RSAAlgorithm.SHA512,
}
_HMAC_HASHES = {
    256: HMACAlgorithm.SHA256,
    384: HMACAlgorithm.SHA384,
    512: HMACAlgorithm.SHA512,
}


class SiteVerifier:
    """Checks signatures for one site with a fixed algorithm and key.

    The key is held privately and never handed back out.
    """

    __slots__ = ("_algorithm", "_family", "_impl", "_key")

    def __init__(
        self, algorithm: str, family: AlgorithmFamily, impl: Algorithm, key: Any
    ) -> None:
        self._algorithm = algorithm
        self._family = family
        self._impl = impl
        self._key = key

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def family(self) -> AlgorithmFamily:
        return self._family

    def verify(self, signing_input: bytes, signature: bytes) -> bool:
        """Return ``True`` when ``signature`` is valid for ``signing_input``."""
        return bool(self._impl.verify(signing_input, self._key, signature))

    def __repr__(self) -> str:
        return f"SiteVerifier(algorithm={self._algorithm!r})"


def build_verifier(
    family: AlgorithmFamily, variant: str, material: Optional[KeyMaterial]
) -> SiteVerifier:
    """Construct the verifier for ``variant`` bound to ``material``.

    Raises:
        MissingKeyMaterial: No usable key material for ``family``.
        UnsupportedVariant: ``variant`` is not a constructible option of
            ``family``.
    """

    name = canonical_variant(variant)
    if name is None or VARIANTS[name][0] is not family:
        raise UnsupportedVariant(
            f"Algorithm {variant!r} is not available for {family.value}"
        )
    bits = VARIANTS[name][1]

    if family is AlgorithmFamily.RSA:
        if not isinstance(material, RsaPublicKey):
            raise MissingKeyMaterial("No RSA public key available")
        return SiteVerifier(name, family, RSAAlgorithm(_RSA_HASHES[bits]), material.key)

    if not isinstance(material, HmacSecret):
        raise MissingKeyMaterial("No HMAC secret available")
    return SiteVerifier(name, family, HMACAlgorithm(_HMAC_HASHES[bits]), material.secret)


__all__ = ["SiteVerifier", "build_verifier"]
