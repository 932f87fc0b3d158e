from typing import Any, Optional

import sentry_sdk
import structlog
from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, load_settings
from .errors import InvalidCaseError
from .logging_config import configure_logging
from .policy import analyze_case

logger = structlog.get_logger(__name__)


def _idle_state() -> dict:
    return {
        "status": "IDLE",
        "rule": None,
        "reason": "System Ready",
        "last_case": None,
    }


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.service_name, settings.log_level, settings.log_format)

    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            traces_sample_rate=1.0,
            send_default_pii=False,
        )
        logger.info("sentry_enabled")

    app = FastAPI(title="Payment Case Triage")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    policy = settings.policy
    # Last decision, polled by dashboards. Not read by the evaluator.
    app.state.current = _idle_state()

    @app.get("/api/triage/status")
    def get_status():
        """Frontend polls this to see the most recent decision."""
        return app.state.current

    @app.get("/api/triage/policy")
    def get_policy():
        return policy.model_dump()

    @app.post("/api/triage/evaluate")
    def evaluate_case(payload: Any = Body(...)):
        with sentry_sdk.start_transaction(
            op="triage.evaluate", name="Evaluate payment case"
        ) as span:
            try:
                result = analyze_case(payload, policy)
            except InvalidCaseError as exc:
                sentry_sdk.set_tag("decision", "INVALID")
                raise HTTPException(status_code=422, detail=exc.to_response().model_dump())

            span.set_data("rule", result.rule.value)
            sentry_sdk.set_tag("decision", result.decision.value)
            sentry_sdk.set_tag("rule", result.rule.value)

            app.state.current = {
                "status": result.decision.value,
                "rule": result.rule.value,
                "reason": result.reason,
                "last_case": payload,
            }
            return result.model_dump(mode="json")

    return app


app = create_app()
