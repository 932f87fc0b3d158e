import os
import sys
from typing import Optional

import requests
from dotenv import load_dotenv

from triage.errors import InvalidCaseError
from triage.logging_config import configure_logging
from triage.models import PolicyConfig
from triage.policy import analyze_case
from triage.scenarios import SCENARIOS

load_dotenv()


def _report(name: str, data: dict, output: Optional[dict], expected: str) -> bool:
    print(f"--- Scenario: {name} ---")
    print(f"📥 INPUT: {data}")
    if output is None:
        print("❌ OUTPUT: none\n")
        return False

    print(f"📤 OUTPUT: {output}")
    matched = output.get("decision") == expected
    if not matched:
        print(f"⚠️ MISMATCH: expected {expected}, got {output.get('decision')}")
    print()
    return matched


def run_local(config: Optional[PolicyConfig] = None) -> int:
    """Evaluate every scenario in-process. Returns the number of mismatches."""
    print("=== RUNNING DECISION SCENARIOS (local) ===\n")
    failures = 0
    for scenario in SCENARIOS:
        try:
            output = analyze_case(scenario["data"], config).model_dump(mode="json")
        except InvalidCaseError as e:
            print(f"❌ [TRIAGE] Rejected: {e.message} {e.details}")
            output = None
        if not _report(scenario["name"], scenario["data"], output, scenario["expected"]):
            failures += 1
    return failures


def run_remote(base_url: str) -> int:
    """Post every scenario to a running triage service. Returns the number of mismatches."""
    print(f"=== RUNNING DECISION SCENARIOS against {base_url} ===\n")
    failures = 0
    for scenario in SCENARIOS:
        output = None
        try:
            response = requests.post(
                f"{base_url.rstrip('/')}/api/triage/evaluate",
                json=scenario["data"],
                timeout=10,
            )
            output = response.json()
            if not response.ok:
                print(f"❌ [TRIAGE] HTTP {response.status_code}: {output}")
                output = None
        except requests.RequestException as e:
            print(f"❌ [RUNNER] Error connecting to triage service: {e}")
        if not _report(scenario["name"], scenario["data"], output, scenario["expected"]):
            failures += 1
    return failures


def main() -> int:
    # Keep structlog events out of the scenario report unless something goes wrong
    configure_logging("triage-demo", log_level="warning", fmt="console")
    base_url = os.getenv("TRIAGE_URL")
    failures = run_remote(base_url) if base_url else run_local()
    if failures:
        print(f"🛑 {failures} scenario(s) did not match the expected decision.")
        return 1
    print("✅ All scenarios matched.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
