"""Observation data structures produced by correlation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Sequence, Tuple

from .outcome import Result

RESULT_ORDER: Sequence[Result] = (
    Result.INVALID,
    Result.FAIL,
    Result.ERROR,
    Result.PASS,
)

AUTOMATED_METHOD = "AUTOMATED"
INVENTORY_ITEM = "inventory-item"
ARF_EVIDENCE = "ARF_FILE"


@dataclass(frozen=True)
class Property:
    name: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class Link:
    href: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"href": self.href, "description": self.description}


@dataclass(frozen=True)
class Subject:
    """The host an observation is about, and how it fared."""

    title: str
    type: str
    resource_id: str
    evaluated_on: datetime
    result: Result
    reason: str
    props: Tuple[Property, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "title": self.title,
            "type": self.type,
            "resource_id": self.resource_id,
            "evaluated_on": self.evaluated_on.isoformat(),
            "result": self.result.value,
            "reason": self.reason,
            "props": [prop.to_dict() for prop in self.props],
        }


@dataclass(frozen=True)
class Observation:
    """Capture a single check outcome for one host."""

    title: str
    methods: Tuple[str, ...]
    collected: datetime
    check_id: str
    subjects: Tuple[Subject, ...]
    relevant_evidences: Tuple[Link, ...] = ()

    @property
    def result(self) -> Result:
        return self.subjects[0].result

    def to_dict(self) -> Dict[str, object]:
        return {
            "title": self.title,
            "methods": list(self.methods),
            "collected": self.collected.isoformat(),
            "check_id": self.check_id,
            "subjects": [subject.to_dict() for subject in self.subjects],
            "relevant_evidences": [link.to_dict() for link in self.relevant_evidences],
        }


@dataclass
class ResultSet:
    """Observations in document traversal order."""

    observations: List[Observation] = field(default_factory=list)

    def add_observation(self, observation: Observation) -> None:
        self.observations.append(observation)

    def __iter__(self):
        return iter(self.observations)

    def __len__(self) -> int:
        return len(self.observations)

    def summary(self) -> Dict[Result, int]:
        counts = {result: 0 for result in RESULT_ORDER}
        for observation in self.observations:
            counts[observation.result] += 1
        return counts

    def as_rows(self) -> List[Tuple[str, int]]:
        """Return result/count pairs ordered for reporting."""

        counts = self.summary()
        return [(result.value, counts[result]) for result in RESULT_ORDER]

    @property
    def passed(self) -> bool:
        return all(observation.result is Result.PASS for observation in self.observations)

    def exit_code(self) -> int:
        return max((observation.result.exit_priority for observation in self.observations), default=0)

    def to_dict(self) -> Dict[str, object]:
        return {
            "summary": {result.value: count for result, count in self.summary().items()},
            "observations": [observation.to_dict() for observation in self.observations],
            "passed": self.passed,
        }


def format_summary_table(result_set: ResultSet, max_rows: int = 10) -> str:
    """Create a human-readable summary table for console output."""

    lines: List[str] = []
    lines.append("Correlation Summary")
    lines.append("=" * 40)
    header = f"{'Result':<10} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for result, count in result_set.as_rows():
        lines.append(f"{result:<10} | {count:>5}")
    lines.append("-" * len(header))
    status = "PASS" if result_set.passed else "FAIL"
    lines.append(f"Status    : {status}")
    lines.append(f"Checks    : {len(result_set)}")

    rank = {result: idx for idx, result in enumerate(RESULT_ORDER)}
    failing = sorted(
        (observation for observation in result_set if observation.result is not Result.PASS),
        key=lambda observation: (rank[observation.result], observation.check_id),
    )
    if failing:
        lines.append("")
        lines.append("Non-passing Checks")
        lines.append("-" * 40)
        for observation in failing[:max_rows]:
            subject = observation.subjects[0]
            lines.append(f"[{subject.result.value.upper()}] {observation.check_id} -> {subject.resource_id}")
            lines.append(f"  Rule: {observation.title}")
    return "\n".join(lines)
