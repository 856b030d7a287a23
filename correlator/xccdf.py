"""Read-only views over an XCCDF/ARF results document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from lxml import etree

from .errors import MissingTargetError
from .normalizers import OVAL_SYSTEM
from .utils import parse_xml_bytes, parse_xml_file

logger = logging.getLogger(__name__)

XCCDF_NAMESPACE = "http://checklists.nist.gov/xccdf/1.2"


def _descendants(node: etree._Element, name: str) -> List[etree._Element]:
    # ARF wraps XCCDF in several namespaces; match on local name only.
    return node.xpath(".//*[local-name()=$name]", name=name)


def _child(node: etree._Element, name: str) -> Optional[etree._Element]:
    matches = node.xpath("./*[local-name()=$name]", name=name)
    return matches[0] if matches else None


@dataclass(frozen=True)
class ResultsDocument:
    """A parsed scan results document and where it came from."""

    root: etree._Element
    location: str

    @classmethod
    def from_path(cls, path: Path) -> "ResultsDocument":
        path = Path(path)
        return cls(root=parse_xml_file(path), location=str(path.resolve()))

    @classmethod
    def from_bytes(cls, content: bytes, location: str) -> "ResultsDocument":
        return cls(root=parse_xml_bytes(content), location=location)

    @property
    def evidence_href(self) -> str:
        return f"file://{self.location}"


@dataclass(frozen=True)
class CheckReference:
    """A ``check`` declared by a rule.

    ``name`` is ``None`` when the check has no ``check-content-ref`` and the
    empty string when the reference carries no ``name`` attribute.
    """

    system: str
    name: Optional[str]


@dataclass(frozen=True)
class RuleDefinition:
    rule_id: str
    checks: Tuple[CheckReference, ...] = ()

    def relevant_check(self, system: str = OVAL_SYSTEM) -> Optional[CheckReference]:
        """Return the first check of ``system`` in document order."""

        for check in self.checks:
            if check.system == system:
                return check
        return None


@dataclass(frozen=True)
class RuleResult:
    rule_id: str
    outcome: Optional[str]


class RuleIndex:
    """Mapping from rule identifier to its definition."""

    def __init__(self, rules: Dict[str, RuleDefinition]) -> None:
        self._rules = dict(rules)

    @classmethod
    def build(cls, document: ResultsDocument) -> "RuleIndex":
        rules: Dict[str, RuleDefinition] = {}
        for node in _descendants(document.root, "Rule"):
            rule_id = node.get("id")
            if not rule_id:
                continue
            rules[rule_id] = RuleDefinition(rule_id=rule_id, checks=tuple(_read_checks(node)))
        logger.debug("Indexed %d rules from %s", len(rules), document.location)
        return cls(rules)

    def get(self, rule_id: str) -> Optional[RuleDefinition]:
        return self._rules.get(rule_id)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)


def _read_checks(rule: etree._Element) -> Iterator[CheckReference]:
    # Only the rule's own checks; complex-check children are not expanded.
    for check in rule.xpath("./*[local-name()='check']"):
        ref = _child(check, "check-content-ref")
        name = None if ref is None else ref.get("name", "")
        yield CheckReference(system=check.get("system", ""), name=name)


def iter_rule_results(document: ResultsDocument) -> Iterator[RuleResult]:
    """Yield rule-results in document order."""

    for node in _descendants(document.root, "rule-result"):
        result = _child(node, "result")
        outcome = None if result is None else (result.text or "")
        yield RuleResult(rule_id=node.get("idref", ""), outcome=outcome)


def find_target(document: ResultsDocument) -> str:
    """Return the host named by the first ``target`` element."""

    targets = _descendants(document.root, "target")
    target = (targets[0].text or "").strip() if targets else ""
    if not target:
        raise MissingTargetError("result has no 'target' element", value=document.location)
    return target
