"""Locate the key material a site declares: inline literal or key file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .exceptions import AmbiguousKeySource, KeySourceUnreadable
from .models import SiteRecord


@dataclass(frozen=True)
class KeySource:
    """Where a site's key material comes from.

    Exactly one of ``literal`` and ``path`` is set.
    """

    literal: Optional[str] = None
    path: Optional[Path] = None

    @property
    def is_file(self) -> bool:
        return self.path is not None

    def read_text(self) -> str:
        if self.path is not None:
            return self.path.read_text(encoding="utf-8")
        return (self.literal or "").strip()

    def read_bytes(self) -> bytes:
        """Return the raw material; literals are trimmed, files are verbatim."""
        if self.path is not None:
            return self.path.read_bytes()
        return (self.literal or "").strip().encode("utf-8")

    def describe(self) -> str:
        return str(self.path) if self.path is not None else "inline key"


def expand_path(raw: str, base_dir: Union[str, Path, None] = None) -> Path:
    """Resolve ``raw`` against ``base_dir`` unless it is already absolute."""
    candidate = Path(raw.strip())
    if not candidate.is_absolute():
        candidate = Path(base_dir or Path.cwd()) / candidate
    return candidate.absolute()


def resolve_key_source(
    site: SiteRecord, base_dir: Union[str, Path, None] = None
) -> KeySource:
    """Validate the key declaration of ``site`` and return its source.

    A file-based site has its ``path`` rewritten to the absolute location.

    Raises:
        AmbiguousKeySource: Both or neither of the key literal and path are set.
        KeySourceUnreadable: The key file is missing or cannot be read.
    """

    if site.path_defined == site.key_defined:
        raise AmbiguousKeySource(
            "Only one of path or key must be defined.", site=site.label
        )

    if site.key_defined:
        return KeySource(literal=site.key)

    path = expand_path(site.path or "", base_dir)
    if not path.is_file() or not os.access(path, os.R_OK):
        raise KeySourceUnreadable(
            f"Path does not exist or is not readable: {site.path}",
            site=site.label,
        )
    site.path = str(path)
    return KeySource(path=path)


__all__ = ["KeySource", "expand_path", "resolve_key_source"]
