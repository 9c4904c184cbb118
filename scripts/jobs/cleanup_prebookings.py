"""
Run the prebooking expiry sweep once. Intended for cron, e.g.
  */15 * * * *  cd /opt/lorrybay && python scripts/jobs/cleanup_prebookings.py
Exit code 1 when either update failed; safe to re-run.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import json
from app.database import SessionLocal
from app.dependencies import build_repository
from app.services.prebooking_sweep import sweep_expired_prebookings


def main() -> int:
    db = SessionLocal()
    try:
        result = sweep_expired_prebookings(build_repository(db))
    finally:
        db.close()
    print(json.dumps(result.to_response()))
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
