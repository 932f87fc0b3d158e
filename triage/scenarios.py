"""
Sample payment cases used by the demo runner and the test suite.
"""

SCENARIOS = [
    {
        "name": "Standard Pending Reversal",
        "expected": "WAIT",
        "data": {
            "status": "PENDING",
            "gateway_response": "TIMEOUT",
            "amount": 150,
            "debited_from_customer": True,
            "time_elapsed_hours": 2,
            "system_certainty_score": 1.0,
        },
    },
    {
        "name": "Money Limbo (Debited but Failed)",
        "expected": "ESCALATE",
        "data": {
            "status": "FAILED",
            "gateway_response": "FAILURE",
            "amount": 4500,
            "debited_from_customer": True,
            "time_elapsed_hours": 0.5,
            "system_certainty_score": 1.0,
        },
    },
    {
        "name": "High Value Panic",
        "expected": "ESCALATE",
        "data": {
            "status": "PENDING",
            "gateway_response": "TIMEOUT",
            "amount": 12000,
            "debited_from_customer": True,
            "time_elapsed_hours": 1,
            "system_certainty_score": 1.0,
        },
    },
]
