"""Error taxonomy for site resolution."""

from __future__ import annotations

from typing import Optional


class ConfigurationFatal(Exception):
    """The whole settings document is unusable; no site is resolved."""


class DocumentLoadError(ConfigurationFatal):
    """The settings document could not be parsed or validated."""


class UnsupportedSchemaVersion(ConfigurationFatal):
    """The document declares a schema version this resolver does not know."""

    def __init__(self, version: object) -> None:
        super().__init__(f"Unsupported settings version: {version!r}")
        self.version = version


class SiteRejected(Exception):
    """A single site declaration was rejected and will be skipped."""

    reason = "SiteRejected"

    def __init__(self, detail: str = "", site: Optional[str] = None) -> None:
        super().__init__(detail or self.reason)
        self.detail = detail
        self.site = site


class AmbiguousKeySource(SiteRejected):
    reason = "AmbiguousKeySource"


class KeySourceUnreadable(SiteRejected):
    reason = "KeySourceUnreadable"


class InvalidAlgorithm(SiteRejected):
    reason = "InvalidAlgorithm"


class UnsupportedEncoding(SiteRejected):
    reason = "UnsupportedEncoding"


class KeyDecodeError(SiteRejected):
    reason = "KeyDecodeError"


class MissingKeyMaterial(SiteRejected):
    reason = "MissingKeyMaterial"


class UnsupportedVariant(SiteRejected):
    reason = "UnsupportedVariant"


class MissingIdentifier(SiteRejected):
    reason = "MissingIdentifier"


class DuplicateDefault(SiteRejected):
    reason = "DuplicateDefault"


class DuplicateIdentifier(SiteRejected):
    reason = "DuplicateIdentifier"


__all__ = [
    "AmbiguousKeySource",
    "ConfigurationFatal",
    "DocumentLoadError",
    "DuplicateDefault",
    "DuplicateIdentifier",
    "InvalidAlgorithm",
    "KeyDecodeError",
    "KeySourceUnreadable",
    "MissingIdentifier",
    "MissingKeyMaterial",
    "SiteRejected",
    "UnsupportedEncoding",
    "UnsupportedSchemaVersion",
    "UnsupportedVariant",
]
