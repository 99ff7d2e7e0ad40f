#!/usr/bin/env python3
"""Aggregate daily NPS feedback per business and send a summary."""

from __future__ import annotations

import argparse
import os
import sys
from datetime import date, datetime, time, timedelta
from pathlib import Path

from sqlalchemy.orm import Session

# Ensure ``api`` package is importable when running as a standalone script
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BASE_DIR))

from api.app.db import init_db  # noqa: E402
from api.app.providers import email_stub  # noqa: E402
from api.app.repos_sqlalchemy import FeedbackRepoSQL, OwnerRepoSQL  # noqa: E402
from api.app.services.stats import summarize  # noqa: E402
from api.app.utils.clock import utcnow  # noqa: E402


def aggregate(session: Session, day: date) -> dict[str, dict]:
    """Return NPS and response count per business for ``day`` (UTC)."""

    start = datetime.combine(day, time.min)
    end = datetime.combine(day, time.max)
    feedback_repo = FeedbackRepoSQL(session)
    result: dict[str, dict] = {}
    for owner in OwnerRepoSQL(session).list_all():
        records = feedback_repo.list_for_owner(owner.id, since=start, until=end)
        if not records:
            continue
        summary = summarize(records)
        result[owner.business_name] = {
            "nps": summary.nps_score,
            "count": summary.total_feedbacks,
        }
    return result


def build_digest(session: Session, day: date) -> str:
    summary = aggregate(session, day)
    lines = [f"NPS digest {day.isoformat()}"]
    for business, stats in summary.items():
        lines.append(f"{business}: nps={stats['nps']} count={stats['count']}")
    message = "\n".join(lines)
    target = os.getenv("NPS_DIGEST_EMAIL")
    email_stub.send(
        "nps.digest",
        {"subject": f"Daily NPS Summary {day.isoformat()}", "message": message},
        target,
    )
    return message


def main(argv: list[str] | None = None) -> str:
    """Build the digest for ``YYYY-MM-DD`` or, by default, yesterday."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("day", nargs="?", help="day to summarise (YYYY-MM-DD)")
    args = parser.parse_args(argv)
    day = (
        utcnow().date() - timedelta(days=1)
        if args.day is None
        else datetime.strptime(args.day, "%Y-%m-%d").date()
    )
    session = init_db()()
    try:
        message = build_digest(session, day)
    finally:
        session.close()
    print(message)
    return message


if __name__ == "__main__":  # pragma: no cover - CLI entry
    main()
