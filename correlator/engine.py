"""Correlate XCCDF rule-results with the checks a policy expects."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .errors import CorrelationError
from .normalizers import CheckNameParser, OVAL_SYSTEM, get_parser
from .outcome import Result
from .policy import PolicyCheckSet
from .result import (
    ARF_EVIDENCE,
    AUTOMATED_METHOD,
    INVENTORY_ITEM,
    Link,
    Observation,
    Property,
    ResultSet,
    Subject,
)
from .status import map_result_status
from .xccdf import ResultsDocument, RuleIndex, RuleResult, find_target, iter_rule_results

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def correlate(
    document: ResultsDocument,
    check_set: PolicyCheckSet,
    *,
    parser: Optional[CheckNameParser] = None,
    clock: Optional[Clock] = None,
) -> ResultSet:
    """Build one observation per rule-result whose check the policy expects.

    Rule-results are skipped when their rule is not in the document, when the
    rule has no check of the parser's system, or when the normalized check id
    is not in ``check_set``. A malformed check id, a missing target or an
    unrecognized status raises a ``CorrelationError`` and no partial result
    is returned.
    """

    parser = parser or get_parser(OVAL_SYSTEM)
    clock = clock or _utcnow

    target = find_target(document)
    logger.debug("hostname from results target is %s", target)

    index = RuleIndex.build(document)
    result_set = ResultSet()
    for rule_result in iter_rule_results(document):
        rule = index.get(rule_result.rule_id)
        if rule is None:
            logger.debug("Skipping %s: rule not defined in document", rule_result.rule_id)
            continue

        check = rule.relevant_check(parser.system)
        if check is None or check.name is None:
            logger.debug("Skipping %s: no %s check reference", rule_result.rule_id, parser.system)
            continue

        try:
            check_id = parser.parse(check.name)
        except CorrelationError as exc:
            exc.rule_id = exc.rule_id or rule_result.rule_id
            raise

        if check_id not in check_set:
            logger.debug("Skipping %s: check %s not in policy", rule_result.rule_id, check_id)
            continue

        mapped = map_result_status(rule_result.outcome, rule_id=rule_result.rule_id)
        result_set.add_observation(_build_observation(document, target, rule_result, check_id, mapped, clock))

    logger.info("Correlated %d observations for host %s", len(result_set), target)
    return result_set


def _build_observation(
    document: ResultsDocument,
    target: str,
    rule_result: RuleResult,
    check_id: str,
    mapped: Result,
    clock: Clock,
) -> Observation:
    collected = clock()
    subject = Subject(
        title=f"Host {target}",
        type=INVENTORY_ITEM,
        resource_id=target,
        evaluated_on=collected,
        result=mapped,
        reason=f"openscap rule-result is {(rule_result.outcome or '').strip()}",
        props=(Property(name="hostname", value=target),),
    )
    return Observation(
        title=rule_result.rule_id,
        methods=(AUTOMATED_METHOD,),
        collected=collected,
        check_id=check_id,
        subjects=(subject,),
        relevant_evidences=(Link(href=document.evidence_href, description=ARF_EVIDENCE),),
    )
