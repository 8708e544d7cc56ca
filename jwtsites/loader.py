"""Load settings documents (XML or YAML) into :class:`SiteConfiguration`.

The XML form mirrors the historical servlet-container settings file::

    <sites version="1">
      <site url="https://example.org" algorithm="RS256" encoding="pem"
            path="keys/example.pub"/>
      <site algorithm="HS256" encoding="plain" default="true">secret</site>
    </sites>

The YAML form carries the same fields::

    version: 1
    sites:
      - url: https://example.org
        algorithm: RS256
        encoding: pem
        path: keys/example.pub
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Dict, Optional, Union

import yaml
from lxml import etree
from pydantic import ValidationError

from .exceptions import DocumentLoadError
from .models import SiteConfiguration

logger = logging.getLogger(__name__)

FORMATS = ("xml", "yaml")

Source = Union[bytes, str, IO[bytes], IO[str]]


def _read_source(source: Source) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, str):
        return source.encode("utf-8")
    data = source.read()
    return data.encode("utf-8") if isinstance(data, str) else data


def detect_format(raw: bytes) -> str:
    """Guess the document format from its first meaningful byte."""
    stripped = raw.lstrip(b"\xef\xbb\xbf \t\r\n")
    return "xml" if stripped.startswith(b"<") else "yaml"


def _xml_payload(raw: bytes) -> Dict[str, Any]:
    parser = etree.XMLParser(
        resolve_entities=False, no_network=True, remove_comments=True
    )
    try:
        root = etree.fromstring(raw, parser)
    except etree.XMLSyntaxError as e:
        raise DocumentLoadError(f"Malformed XML settings: {e}") from e

    if root.tag != "sites":
        raise DocumentLoadError(f"Unexpected root element <{root.tag}>")

    sites = []
    for element in root.iterchildren("site"):
        record: Dict[str, Any] = dict(element.attrib)
        record["key"] = "".join(element.itertext())
        sites.append(record)
    return {"version": root.get("version"), "sites": sites}


def _yaml_payload(raw: bytes) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"Malformed YAML settings: {e}") from e
    if not isinstance(data, dict):
        raise DocumentLoadError("Top-level YAML structure must be a mapping")
    return data


def load_sites(source: Source, fmt: Optional[str] = None) -> SiteConfiguration:
    """Parse ``source`` into a validated :class:`SiteConfiguration`.

    Args:
        source: Raw bytes, text, or a readable stream holding the document.
        fmt: ``"xml"`` or ``"yaml"``. Detected from the content when omitted.

    Raises:
        DocumentLoadError: The document is malformed or does not match the
            expected shape.
    """

    raw = _read_source(source)
    fmt = (fmt or detect_format(raw)).lower()
    if fmt == "xml":
        payload = _xml_payload(raw)
    elif fmt == "yaml":
        payload = _yaml_payload(raw)
    else:
        raise DocumentLoadError(f"Unsupported settings format: {fmt}")

    try:
        config = SiteConfiguration.model_validate(payload)
    except ValidationError as e:
        raise DocumentLoadError(f"Invalid settings document: {e}") from e

    logger.debug(f"Loaded {len(config.sites)} site(s) from {fmt} settings")
    return config


def load_sites_file(path: Union[str, Path], fmt: Optional[str] = None) -> SiteConfiguration:
    """Load a settings document from disk."""
    path = Path(path)
    if fmt is None and path.suffix.lower() in (".yaml", ".yml"):
        fmt = "yaml"
    try:
        with path.open("rb") as handle:
            return load_sites(handle, fmt)
    except OSError as e:
        raise DocumentLoadError(f"Cannot read settings file {path}: {e}") from e


__all__ = ["FORMATS", "detect_format", "load_sites", "load_sites_file"]
