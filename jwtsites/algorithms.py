"""Classification of algorithm tokens into key families."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class AlgorithmFamily(str, Enum):
    """Key algebra a signing algorithm belongs to."""

    RSA = "RSA"
    HMAC = "HMAC"
    INVALID = "INVALID"


# Canonical variant name -> (family, digest size in bits)
VARIANTS: Dict[str, tuple[AlgorithmFamily, int]] = {
    "RS256": (AlgorithmFamily.RSA, 256),
    "RS384": (AlgorithmFamily.RSA, 384),
    "RS512": (AlgorithmFamily.RSA, 512),
    "HS256": (AlgorithmFamily.HMAC, 256),
    "HS384": (AlgorithmFamily.HMAC, 384),
    "HS512": (AlgorithmFamily.HMAC, 512),
}


def canonical_variant(token: Optional[str]) -> Optional[str]:
    """Return the upper-case variant name for ``token`` or ``None``."""
    if not token:
        return None
    name = token.upper()
    return name if name in VARIANTS else None


def classify(token: Optional[str]) -> AlgorithmFamily:
    """Map an algorithm token to its family, ignoring case."""
    name = canonical_variant(token)
    if name is None:
        return AlgorithmFamily.INVALID
    return VARIANTS[name][0]


__all__ = ["AlgorithmFamily", "VARIANTS", "canonical_variant", "classify"]
