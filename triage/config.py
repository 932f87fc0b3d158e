"""
config.py - Process-wide settings, read once from the environment (.env supported).
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigurationError, describe_validation_errors
from .models import PolicyConfig

load_dotenv()

# env var -> PolicyConfig field
POLICY_ENV_VARS = {
    "TRIAGE_HIGH_VALUE_THRESHOLD": "high_value_threshold",
    "TRIAGE_AUTO_REVERSAL_WINDOW_HOURS": "auto_reversal_window_hours",
    "TRIAGE_CERTAINTY_THRESHOLD": "certainty_threshold",
}

LOG_FORMATS = ("json", "console")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    service_name: str = "payment-triage"
    log_level: str = "info"
    log_format: str = "json"
    sentry_dsn: Optional[str] = None
    policy: PolicyConfig = PolicyConfig()


def load_policy_config(environ: Optional[Mapping[str, str]] = None) -> PolicyConfig:
    """Build a PolicyConfig, overriding defaults with any TRIAGE_* thresholds set."""
    environ = os.environ if environ is None else environ

    overrides = {}
    for var, field in POLICY_ENV_VARS.items():
        raw = environ.get(var)
        if raw is None or raw.strip() == "":
            continue
        try:
            overrides[field] = float(raw)
        except ValueError:
            raise ConfigurationError(
                f"{var} must be a number",
                {"variable": var, "value": raw},
            )

    try:
        return PolicyConfig(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(
            "Policy thresholds out of range",
            {"errors": describe_validation_errors(exc)},
        ) from exc


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    environ = os.environ if environ is None else environ

    log_level = (environ.get("TRIAGE_LOG_LEVEL") or "").strip().lower() or "info"
    if log_level not in ("debug", "info", "warning", "error", "critical"):
        raise ConfigurationError(
            "TRIAGE_LOG_LEVEL is not a known level",
            {"variable": "TRIAGE_LOG_LEVEL", "value": log_level},
        )

    log_format = (environ.get("TRIAGE_LOG_FORMAT") or "").strip().lower() or "json"
    if log_format not in LOG_FORMATS:
        raise ConfigurationError(
            f"TRIAGE_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}",
            {"variable": "TRIAGE_LOG_FORMAT", "value": log_format},
        )

    return Settings(
        log_level=log_level,
        log_format=log_format,
        sentry_dsn=environ.get("SENTRY_DSN") or None,
        policy=load_policy_config(environ),
    )
