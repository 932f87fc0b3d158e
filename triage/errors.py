"""
errors.py - What the triage layer raises when it cannot classify an input.

An ESCALATE decision is never an error. These exceptions mean the input (or
the process configuration) is malformed and must be fixed upstream.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error body returned to callers."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class TriageError(Exception):
    """Base exception for the triage service."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(code=self.code, message=self.message, details=self.details)


class InvalidCaseError(TriageError):
    """The case record is missing fields or holds out-of-range values."""

    def __init__(self, message: str = "Invalid case record", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_INPUT", message, details)


class ConfigurationError(TriageError):
    """Policy thresholds from the environment could not be loaded."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


def describe_validation_errors(exc) -> list:
    """Flatten a pydantic ValidationError into JSON-safe dicts."""
    return [
        {
            "loc": ".".join(str(part) for part in err.get("loc", ())),
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
