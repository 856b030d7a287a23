"""Extract check short names from OVAL definition identifiers."""

from __future__ import annotations

import re

from correlator.errors import MalformedIdentifierError, MissingIdentifierError

OVAL_SYSTEM = "http://oval.mitre.org/XMLSchema/oval-definitions-5"

# oval:<namespace>-<shortname>:def:<n>, e.g. oval:ssg-sshd_enabled:def:1
# The capture is lazy up to the first colon, so a hyphenated suffix stays
# in the short name: oval:ssg-sshd_enabled-1:def:1 -> sshd_enabled-1.
OVAL_NAME_PATTERN = re.compile(r"^[^:]*?:[^-]*?-(.*?):.*?$")
SHORT_NAME_GROUP = 1


class OvalCheckParser:
    """Strip the OVAL-specific naming from a definition id."""

    system = OVAL_SYSTEM

    def parse(self, raw: str) -> str:
        name = (raw or "").strip()
        if not name:
            raise MissingIdentifierError("check-content-ref node has no 'name' attribute", value=raw)
        match = OVAL_NAME_PATTERN.match(name)
        if match is None or not match.group(SHORT_NAME_GROUP):
            raise MalformedIdentifierError(f"check id {name!r} is in unexpected format", value=name)
        return match.group(SHORT_NAME_GROUP)
