"""Check-name parser registry."""

from __future__ import annotations

from typing import Dict, Optional, Protocol, Tuple


class CheckNameParser(Protocol):
    """Protocol implemented by all vendor check-name parsers."""

    system: str

    def parse(self, raw: str) -> str:
        """Return the canonical short name embedded in ``raw``."""


_PARSERS: Dict[str, CheckNameParser] = {}


def register_parser(parser: CheckNameParser) -> None:
    _PARSERS[parser.system] = parser


def get_parser(system: str) -> Optional[CheckNameParser]:
    return _PARSERS.get(system)


def supported_systems() -> Tuple[str, ...]:
    return tuple(_PARSERS)


from .oval import OVAL_SYSTEM, OvalCheckParser  # noqa: E402

register_parser(OvalCheckParser())

__all__ = [
    "CheckNameParser",
    "OVAL_SYSTEM",
    "OvalCheckParser",
    "get_parser",
    "register_parser",
    "supported_systems",
]
