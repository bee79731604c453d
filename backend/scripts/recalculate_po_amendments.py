"""
Recompute the active PO amendment of every Active project.

Run on demand (or from cron) after a date boundary:
    python scripts/recalculate_po_amendments.py [--date YYYY-MM-DD]
"""

import argparse
import asyncio
import os
import sys
from datetime import date

# Add the backend directory to sys.path to allow imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.api.deps import get_db_session
from app.core.clock import FixedClock, system_clock
from app.core.logging_config import setup_logging
from app.services.data import POAmendmentService


async def recalculate(today: date) -> dict:
    async with get_db_session() as db:
        service = POAmendmentService(db, today)
        return await service.recalculate_all_active_projects()


def main() -> int:
    parser = argparse.ArgumentParser(description="Recompute active PO amendments for all Active projects")
    parser.add_argument("--date", help="Evaluate as of this ISO date instead of today")
    args = parser.parse_args()

    setup_logging(service_name="staffing-recalculate")
    clock = FixedClock(date.fromisoformat(args.date)) if args.date else system_clock

    summary = asyncio.run(recalculate(clock.today()))
    print(
        f"Processed {summary['processed']} projects, {summary['failed']} failed, "
        f"{summary['activated']} with an active PO"
    )
    return 1 if summary["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
