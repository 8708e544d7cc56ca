"""Pydantic models describing site settings documents."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUPPORTED_VERSION = 1


class SiteRecord(BaseModel):
    """One site declaration as read from the settings document."""

    # YAML reads unquoted secrets such as ``key: 12345`` as numbers
    model_config = ConfigDict(coerce_numbers_to_str=True)

    url: str = Field(default="", description="Origin the site is looked up by")
    algorithm: str = Field(default="", description="Signing algorithm token")
    encoding: str = Field(default="", description="pem, base64 or plain")
    key: str = Field(default="", description="Inline key or secret material")
    path: Optional[str] = Field(default=None, description="Key file location")
    default: bool = False

    @field_validator("url", "algorithm", "encoding", "key", mode="before")
    @classmethod
    def _none_as_empty(cls, v: object) -> object:
        return "" if v is None else v

    @property
    def key_defined(self) -> bool:
        return bool(self.key.strip())

    @property
    def path_defined(self) -> bool:
        return bool(self.path and self.path.strip())

    @property
    def label(self) -> str:
        """Human readable name used in diagnostics."""
        if self.url:
            return self.url
        return "<default>" if self.default else "<unnamed>"


class SiteConfiguration(BaseModel):
    """Root of a settings document: a schema version and its sites."""

    version: int
    sites: List[SiteRecord] = Field(default_factory=list)

    @property
    def supported(self) -> bool:
        return self.version == SUPPORTED_VERSION


__all__ = ["SUPPORTED_VERSION", "SiteConfiguration", "SiteRecord"]
