"""Utility helpers for the correlator."""

from .fileio import read_yaml_file
from .xmlio import parse_xml_bytes, parse_xml_file

__all__ = [
    "read_yaml_file",
    "parse_xml_bytes",
    "parse_xml_file",
]
