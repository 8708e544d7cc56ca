"""Tests for loading settings documents."""

import io

import pytest

from jwtsites.exceptions import DocumentLoadError
from jwtsites.loader import detect_format, load_sites, load_sites_file

XML_SETTINGS = b"""<?xml version="1.0" encoding="UTF-8"?>
<sites version="1">
  <!-- first site -->
  <site url="https://a" algorithm="HS256" encoding="plain">secret1</site>
  <site algorithm="RS256" encoding="pem" path="key.pub" default="true"/>
</sites>
"""

YAML_SETTINGS = """
version: 1
sites:
  - url: https://a
    algorithm: HS256
    encoding: plain
    key: secret1
  - algorithm: RS256
    encoding: pem
    path: key.pub
    default: true
"""


def test_load_xml_from_stream():
    config = load_sites(io.BytesIO(XML_SETTINGS))
    assert config.version == 1
    assert len(config.sites) == 2

    first, second = config.sites
    assert first.url == "https://a"
    assert first.key == "secret1"
    assert first.path is None
    assert first.default is False

    assert second.url == ""
    assert second.key == ""
    assert second.path == "key.pub"
    assert second.default is True


def test_load_yaml_matches_xml():
    from_yaml = load_sites(YAML_SETTINGS)
    from_xml = load_sites(XML_SETTINGS)
    assert from_yaml == from_xml


def test_unsupported_version_is_loaded_not_rejected():
    config = load_sites(b'<sites version="2"><site url="x"/></sites>')
    assert config.version == 2
    assert not config.supported


@pytest.mark.parametrize(
    "document",
    [
        b"<sites version='1'><site>",
        b"<config version='1'/>",
        b"<sites version='one'/>",
        b"<sites/>",
        "- just\n- a list\n",
        "version: [1\n",
    ],
)
def test_malformed_documents_raise(document):
    with pytest.raises(DocumentLoadError):
        load_sites(document)


def test_unknown_format_raises():
    with pytest.raises(DocumentLoadError):
        load_sites(XML_SETTINGS, fmt="json")


def test_detect_format():
    assert detect_format(b"\n  <sites/>") == "xml"
    assert detect_format(b"version: 1") == "yaml"


def test_load_sites_file(tmp_path):
    path = tmp_path / "sites.yml"
    path.write_text(YAML_SETTINGS)
    assert len(load_sites_file(path).sites) == 2

    with pytest.raises(DocumentLoadError):
        load_sites_file(tmp_path / "missing.xml")


def test_yaml_numbers_load_as_strings():
    config = load_sites(
        "version: 1\nsites:\n  - url: 8080\n    algorithm: HS256\n"
        "    encoding: plain\n    key: 12345\n"
    )
    site = config.sites[0]
    assert site.key == "12345"
    assert site.url == "8080"
