"""
Quick CLI to smoke-test a running backend without a frontend.
Usage:
  BASE_URL=http://localhost:8000 python scripts/cli_test.py
"""

import os
import sys
from typing import Any, Dict

import requests

BASE_URL = os.getenv("BASE_URL", "http://localhost:8000")
GUARDIAN_PHONE = os.getenv("GUARDIAN_PHONE", "+91 98765 43210")
FAMILY_PIN = os.getenv("FAMILY_PIN", "4321")


def post_json(path: str, payload: Dict[str, Any] | None = None) -> Any:
    resp = requests.post(f"{BASE_URL}{path}", json=payload, timeout=20)
    resp.raise_for_status()
    return resp.json()


def get_json(path: str) -> Any:
    resp = requests.get(f"{BASE_URL}{path}", timeout=20)
    resp.raise_for_status()
    return resp.json()


def main() -> None:
    print(f"Testing backend at {BASE_URL}")

    try:
        print("\n=> POST /guardians")
        guardian = post_json("/guardians", {"full_name": "CLI Guardian", "phone": GUARDIAN_PHONE})
        print(guardian)

        print("\n=> POST /seniors")
        senior = post_json(
            "/seniors",
            {"guardian_id": guardian["id"], "name": "CLI Senior", "family_pin": FAMILY_PIN},
        )
        print(senior)

        print("\n=> POST /medications")
        med = post_json(
            "/medications",
            {"senior_id": senior["id"], "name": "Metformin", "dosage": "500mg", "times": ["08:00", "20:00"]},
        )
        print(med)

        print("\n=> POST /auth/dual-key")
        print(post_json("/auth/dual-key", {"phone": GUARDIAN_PHONE, "pin": FAMILY_PIN}))

        print("\n=> POST /medication-reminders")
        print(post_json("/medication-reminders"))

        print("\n=> GET /medication-logs")
        logs = get_json(f"/medication-logs?senior_id={senior['id']}")
        print(logs)

        if logs:
            print("\n=> POST /log-medication (taken)")
            print(post_json("/log-medication", {"action": "taken", "medication_log_id": logs[0]["id"]}))

        print("\n=> GET /notifications")
        print(get_json(f"/notifications?senior_id={senior['id']}"))

    except requests.HTTPError as exc:
        print(f"HTTP error: {exc} => {getattr(exc.response, 'text', '')}")
        sys.exit(1)
    except Exception as exc:
        print(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
