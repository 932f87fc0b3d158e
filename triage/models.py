"""
models.py - Record types for payment-case triage.

A CaseRecord is validated when it is built, so the evaluator only ever sees
well-formed values. Field names follow the gateway's snake_case payloads;
camelCase aliases are accepted too.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, model_validator
from pydantic.alias_generators import to_camel


class CaseStatus(str, Enum):
    FAILED = "FAILED"
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"


class GatewayResponse(str, Enum):
    FAILURE = "FAILURE"
    TIMEOUT = "TIMEOUT"
    SUCCESS = "SUCCESS"


class DecisionType(str, Enum):
    WAIT = "WAIT"
    ESCALATE = "ESCALATE"


class RuleCode(str, Enum):
    """Which rule produced a decision."""

    MONEY_IN_LIMBO = "MONEY_IN_LIMBO"
    HIGH_VALUE = "HIGH_VALUE"
    LOW_CERTAINTY = "LOW_CERTAINTY"
    PENDING_WITHIN_WINDOW = "PENDING_WITHIN_WINDOW"
    SLA_BREACH = "SLA_BREACH"
    NO_SAFE_PROFILE = "NO_SAFE_PROFILE"


class CaseRecord(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    status: CaseStatus
    gateway_response: GatewayResponse  # audit only, no rule reads it
    amount: float = Field(..., ge=0, allow_inf_nan=False, strict=True)
    currency: Optional[str] = None
    debited_from_customer: StrictBool
    time_elapsed_hours: float = Field(..., ge=0, allow_inf_nan=False, strict=True)
    system_certainty_score: float = Field(..., ge=0, le=1, allow_inf_nan=False, strict=True)

    @model_validator(mode="before")
    @classmethod
    def reject_duplicate_keys(cls, data: Any) -> Any:
        # A field given under both its snake_case name and camelCase alias is ambiguous
        if isinstance(data, dict):
            for name in cls.model_fields:
                alias = to_camel(name)
                if alias != name and name in data and alias in data:
                    raise ValueError(f"field given as both '{name}' and '{alias}'")
        return data


class PolicyConfig(BaseModel):
    """Thresholds the evaluator compares against. Defaults are the documented policy."""

    model_config = ConfigDict(frozen=True)

    high_value_threshold: float = Field(5000, ge=0, allow_inf_nan=False)
    auto_reversal_window_hours: float = Field(24, ge=0, allow_inf_nan=False)
    certainty_threshold: float = Field(1.0, ge=0, le=1, allow_inf_nan=False)


DEFAULT_POLICY = PolicyConfig()


class Decision(BaseModel):
    model_config = ConfigDict(frozen=True)

    decision: DecisionType
    reason: str
    rule: RuleCode

    @property
    def escalated(self) -> bool:
        return self.decision is DecisionType.ESCALATE
