"""Policy model and the check set used to scope correlation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, FrozenSet, Iterable, Iterator, Tuple

import yaml

from .errors import PolicyFormatError
from .utils import read_yaml_file


@dataclass(frozen=True)
class PolicyCheck:
    """A check the policy expects, identified by its normalized id."""

    id: str
    description: str = ""


@dataclass(frozen=True)
class PolicyRule:
    rule_id: str
    checks: Tuple[PolicyCheck, ...] = ()


@dataclass(frozen=True)
class Policy:
    """Ordered collection of policy rules."""

    rules: Tuple[PolicyRule, ...] = ()

    def __iter__(self) -> Iterator[PolicyRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


@dataclass(frozen=True)
class PolicyCheckSet:
    """Membership-only projection of the check ids a policy declares."""

    ids: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_policy(cls, policy: Iterable[PolicyRule]) -> "PolicyCheckSet":
        return cls(frozenset(check.id for rule in policy for check in rule.checks))

    @classmethod
    def of(cls, *ids: str) -> "PolicyCheckSet":
        return cls(frozenset(ids))

    def __contains__(self, check_id: object) -> bool:
        return check_id in self.ids

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.ids))

    def __len__(self) -> int:
        return len(self.ids)

    def __bool__(self) -> bool:
        return bool(self.ids)


def load_policy(path: Path) -> Policy:
    """Load a YAML policy document.

    The expected layout is::

        rules:
          - rule_id: xccdf_org.ssgproject.content_rule_sshd_enabled
            checks:
              - id: sshd_enabled
                description: SSH server is enabled
    """

    try:
        data = read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise PolicyFormatError(f"Policy at {path} is not valid YAML: {exc}") from exc
    if data is None:
        raise PolicyFormatError(f"Policy file not found or empty: {path}")
    if not isinstance(data, dict) or not isinstance(data.get("rules", []), list):
        raise PolicyFormatError(f"Policy at {path} must be a mapping with a 'rules' list")
    rules = [_parse_rule(entry, index, path) for index, entry in enumerate(data.get("rules") or [])]
    return Policy(rules=tuple(rules))


def _parse_rule(entry: Any, index: int, path: Path) -> PolicyRule:
    if not isinstance(entry, dict) or not entry.get("rule_id"):
        raise PolicyFormatError(f"{path}: rules[{index}] needs a 'rule_id'")
    checks = entry.get("checks") or []
    if not isinstance(checks, list):
        raise PolicyFormatError(f"{path}: rules[{index}].checks must be a list")
    return PolicyRule(
        rule_id=str(entry["rule_id"]),
        checks=tuple(_parse_check(check, index, path) for check in checks),
    )


def _parse_check(check: Any, index: int, path: Path) -> PolicyCheck:
    if isinstance(check, str):
        return PolicyCheck(id=check)
    if isinstance(check, dict) and check.get("id"):
        return PolicyCheck(id=str(check["id"]), description=str(check.get("description", "")))
    raise PolicyFormatError(f"{path}: rules[{index}] has a check without an 'id'")
