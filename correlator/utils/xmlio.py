"""Hardened XML parsing for scan results documents."""

from __future__ import annotations

from pathlib import Path

from lxml import etree

from correlator.errors import DocumentParseError


def _secure_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_pis=True,
        huge_tree=False,
    )


def parse_xml_file(path: Path) -> etree._Element:
    """Parse ``path`` and return the root element."""

    try:
        tree = etree.parse(str(path), _secure_parser())
    except (etree.XMLSyntaxError, OSError) as exc:
        raise DocumentParseError(f"XML parsing failed for {path}: {exc}", value=str(path)) from exc
    return tree.getroot()


def parse_xml_bytes(content: bytes) -> etree._Element:
    """Parse raw XML bytes and return the root element."""

    try:
        return etree.fromstring(content, _secure_parser())
    except etree.XMLSyntaxError as exc:
        raise DocumentParseError(f"XML parsing failed: {exc}") from exc
