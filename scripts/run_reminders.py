"""
Minimal external scheduler for the reminder scan.
Usage:
  BASE_URL=http://localhost:8000 INTERVAL_SECONDS=300 python scripts/run_reminders.py
"""

import logging
import os
import time

import requests

BASE_URL = os.getenv("BASE_URL", "http://localhost:8000")
INTERVAL_SECONDS = int(os.getenv("INTERVAL_SECONDS", "300"))

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
log = logging.getLogger("run_reminders")


def run_once() -> None:
    resp = requests.post(f"{BASE_URL}/medication-reminders", timeout=60)
    if resp.status_code != 200:
        log.error("Scan failed (%s): %s", resp.status_code, resp.text)
        return
    data = resp.json()
    log.info(
        "Scan at %s: %s due, %s created, %s missed",
        data.get("checked_at"),
        data.get("medications_due"),
        data.get("created"),
        data.get("missed_updated"),
    )


def main() -> None:
    log.info("Polling %s every %ss", BASE_URL, INTERVAL_SECONDS)
    while True:
        try:
            run_once()
        except requests.RequestException as exc:
            log.warning("Scan request failed: %s", exc)
        time.sleep(INTERVAL_SECONDS)


if __name__ == "__main__":
    main()
