"""
Seed the officer directory into the mock DB or Firestore.

Usage:
  - Dry run (default): python scripts/seed_officers.py
  - Apply to configured DB: python scripts/seed_officers.py --apply
  - Force mock DB even if FIREBASE configured: python scripts/seed_officers.py --apply --force-mock
  - Custom directory: python scripts/seed_officers.py --file officers.json --apply

Behavior:
  - Uses the built-in directory from `app.config.reference_data`, or a JSON
    list of officer objects (id, name, email, ward, division, department).
  - Writes each officer to the `officers` collection (document id = officer id).
  - The app reads this collection when OFFICER_SOURCE=firestore.
"""

import argparse
import json
import os
import sys
from typing import List

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config.firebase import get_db  # noqa: E402
from app.config.reference_data import DEFAULT_OFFICERS  # noqa: E402
from app.core.settings import settings  # noqa: E402
from app.models.complaint import Officer  # noqa: E402
from app.services.complaint_store import ComplaintStore  # noqa: E402


def load_officers(path: str) -> List[Officer]:
    with open(path, "r", encoding="utf-8") as f:
        return [Officer(**entry) for entry in json.load(f)]


def write_officers(store: ComplaintStore, officers: List[Officer], apply: bool = False) -> int:
    written = 0
    for officer in officers:
        print(f"Preparing: officers/{officer.id} ({officer.name}, {officer.ward})")
        if not apply:
            continue
        try:
            store.upsert_officer(officer)
            written += 1
            print(f"Wrote: officers/{officer.id}")
        except Exception as e:
            print(f"Failed to write officers/{officer.id}: {e}")
    return written


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write officers to the DB instead of dry-run")
    parser.add_argument("--force-mock", action="store_true", help="Force use of mock DB even if FIREBASE configured")
    parser.add_argument("--file", help="JSON list of officers to seed instead of the built-in directory")
    args = parser.parse_args()

    if args.file:
        if not os.path.exists(args.file):
            print(f"Officer file not found: {args.file}")
            return
        officers = load_officers(args.file)
    else:
        officers = list(DEFAULT_OFFICERS)

    if args.force_mock:
        print("Forcing mock DB usage for this run.")
        settings.USE_MOCK_DB = True

    store = ComplaintStore(get_db())
    written = write_officers(store, officers, apply=args.apply)

    if args.apply:
        print(f"Seeding completed: {written}/{len(officers)} officers written.")
    else:
        print("Dry run complete. Re-run with --apply to write to DB.")


if __name__ == "__main__":
    main()
