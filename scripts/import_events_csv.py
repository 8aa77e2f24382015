"""Import baby events from a CSV export into the running API.

Expected columns: timestamp, event, note
    2025-07-15 09:00:00,ミルク,60ml
    2025-07-15 12:00:00,母乳,左5分/右5分

Usage:
    python scripts/import_events_csv.py path/to/events.csv
"""

import csv
import os
import sys
from datetime import datetime

import requests
from dotenv import load_dotenv

load_dotenv()

API = os.getenv("BABYTRACK_API", "http://localhost:8000")
CALLER_ID = os.getenv("BABYTRACK_CALLER_ID", "csv-import")
TOKEN = os.getenv("BABYTRACK_TOKEN", "")

_TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S", "%Y/%m/%d %H:%M")


def _parse_timestamp(raw: str) -> datetime | None:
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    return None


def parse_csv(path: str) -> list[dict]:
    """Parse the CSV and return a list of event payloads."""
    entries = []
    with open(path, encoding="utf-8") as f:
        for row in csv.DictReader(f):
            event = (row.get("event") or "").strip()
            occurred_at = _parse_timestamp((row.get("timestamp") or "").strip())
            if not event or occurred_at is None:
                continue
            entries.append({
                "event": event,
                "timestamp": occurred_at.isoformat(),
                "note": (row.get("note") or "").strip() or None,
            })
    return entries


def main() -> None:
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    headers = {"X-Caller-Id": CALLER_ID}
    if TOKEN:
        headers["Authorization"] = f"Bearer {TOKEN}"

    entries = parse_csv(sys.argv[1])
    imported = 0
    for entry in entries:
        resp = requests.post(f"{API}/events", json=entry, headers=headers, timeout=5)
        if resp.status_code in (200, 201):
            imported += 1
        else:
            print(f"⚠️  Failed: {entry['timestamp']} — {resp.status_code} {resp.text}")

    print(f"\n✅ Done: {imported}/{len(entries)} imported")


if __name__ == "__main__":
    main()
