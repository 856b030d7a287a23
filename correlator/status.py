"""Map raw XCCDF rule-result tokens onto normalized results."""

from __future__ import annotations

from typing import Dict, Optional

from .errors import MissingStatusError, UnrecognizedStatusError
from .outcome import Result

# notchecked and informational are deliberately absent and surface as
# unrecognized.
STATUS_MAP: Dict[str, Result] = {
    "pass": Result.PASS,
    "fixed": Result.PASS,
    "fail": Result.FAIL,
    "notselected": Result.ERROR,
    "notapplicable": Result.ERROR,
    "error": Result.ERROR,
    "unknown": Result.ERROR,
}


def map_result_status(token: Optional[str], rule_id: Optional[str] = None) -> Result:
    """Translate a raw rule-result token into a :class:`Result`.

    Raises ``MissingStatusError`` when ``token`` is ``None`` and
    ``UnrecognizedStatusError`` for any token outside ``STATUS_MAP``. Both
    expose ``result == Result.INVALID``.
    """

    if token is None:
        raise MissingStatusError("rule-result has no 'result' element", rule_id=rule_id)
    normalized = token.strip()
    try:
        return STATUS_MAP[normalized]
    except KeyError:
        raise UnrecognizedStatusError(
            f"couldn't match rule-result status {normalized!r}",
            rule_id=rule_id,
            value=normalized,
        ) from None
