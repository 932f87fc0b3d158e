"""
policy.py - Payment case triage rules.
Decides whether a "payment failed but amount debited" case can be handled
automatically (WAIT) or must go to a human (ESCALATE).

Rules are checked in a fixed order and the first match wins. WAIT is only
reachable through the pending-within-window branch; every other path ends
in ESCALATE.
"""

from typing import Any, Mapping, Optional, Union

import structlog
from pydantic import ValidationError

from .errors import InvalidCaseError, describe_validation_errors
from .models import (
    DEFAULT_POLICY,
    CaseRecord,
    CaseStatus,
    Decision,
    DecisionType,
    PolicyConfig,
    RuleCode,
)

logger = structlog.get_logger(__name__)


def _num(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _escalate(rule: RuleCode, reason: str) -> Decision:
    return Decision(decision=DecisionType.ESCALATE, reason=reason, rule=rule)


def evaluate(case: CaseRecord, config: PolicyConfig = DEFAULT_POLICY) -> Decision:
    """
    Returns the Decision for a validated case. Pure: no logging, no mutation.
    """

    # FAIL-SAFE 1: Debited but marked failed -> money in limbo
    if case.debited_from_customer and case.status == CaseStatus.FAILED:
        return _escalate(
            RuleCode.MONEY_IN_LIMBO,
            "CRITICAL: Customer debited but transaction marked FAILED. Reconciliation required.",
        )

    # FAIL-SAFE 2: High value, regardless of certainty
    if case.amount > config.high_value_threshold:
        return _escalate(
            RuleCode.HIGH_VALUE,
            f"RISK: Transaction amount ({_num(case.amount)}) exceeds safety threshold "
            f"({_num(config.high_value_threshold)}). Human review mandatory.",
        )

    # FAIL-SAFE 3: Low certainty
    if case.system_certainty_score < config.certainty_threshold:
        return _escalate(
            RuleCode.LOW_CERTAINTY,
            f"UNCERTAINTY: System cannot definitively verify funds location "
            f"(certainty {_num(case.system_certainty_score)} < {_num(config.certainty_threshold)}).",
        )

    # SCENARIO: Pending state
    if case.status == CaseStatus.PENDING:
        window = _num(config.auto_reversal_window_hours)
        if case.time_elapsed_hours < config.auto_reversal_window_hours:
            return Decision(
                decision=DecisionType.WAIT,
                reason=(
                    f"STANDARD PROCESS: Transaction is pending. Auto-reversal window ({window}h) "
                    "active. Advise customer to wait."
                ),
                rule=RuleCode.PENDING_WITHIN_WINDOW,
            )
        return _escalate(
            RuleCode.SLA_BREACH,
            f"SLA BREACH: Pending for {_num(case.time_elapsed_hours)}h, "
            f"auto-reversal window ({window}h) exceeded.",
        )

    # Default: no safe automation profile matched
    return _escalate(
        RuleCode.NO_SAFE_PROFILE,
        "DEFAULT: Case did not match safe automation attributes.",
    )


def parse_case(data: Any) -> CaseRecord:
    """Validate a raw payload into a CaseRecord, raising InvalidCaseError."""
    if not isinstance(data, Mapping):
        raise InvalidCaseError(
            "Case record must be an object",
            {"errors": [{"loc": "", "msg": f"expected a mapping, got {type(data).__name__}", "type": "type_error"}]},
        )
    try:
        return CaseRecord.model_validate(dict(data))
    except ValidationError as exc:
        raise InvalidCaseError(
            "Case record failed validation",
            {"errors": describe_validation_errors(exc)},
        ) from exc


def analyze_case(
    data: Union[CaseRecord, Mapping[str, Any]],
    config: Optional[PolicyConfig] = None,
) -> Decision:
    """
    Validate, log and evaluate a case. This is the entry point for hosts;
    invalid input is logged and re-raised, never escalated.
    """
    config = config or DEFAULT_POLICY

    if isinstance(data, CaseRecord):
        case = data
    else:
        try:
            case = parse_case(data)
        except InvalidCaseError as exc:
            logger.warning("case_rejected", errors=exc.details.get("errors"))
            raise

    logger.info("case_received", case=case.model_dump(mode="json"))
    result = evaluate(case, config)
    logger.info(
        "case_decided",
        decision=result.decision.value,
        rule=result.rule.value,
        reason=result.reason,
    )
    return result
