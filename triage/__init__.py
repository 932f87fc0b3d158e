# Payment case triage package
from .errors import ConfigurationError, InvalidCaseError, TriageError
from .models import (
    DEFAULT_POLICY,
    CaseRecord,
    CaseStatus,
    Decision,
    DecisionType,
    GatewayResponse,
    PolicyConfig,
    RuleCode,
)
from .policy import analyze_case, evaluate, parse_case

__all__ = [
    'evaluate', 'analyze_case', 'parse_case',
    'CaseRecord', 'CaseStatus', 'GatewayResponse', 'PolicyConfig', 'DEFAULT_POLICY',
    'Decision', 'DecisionType', 'RuleCode',
    'TriageError', 'InvalidCaseError', 'ConfigurationError',
]
