"""Explicitly reset and/or seed the configured database.

Usage::

    python -m classifieds.scripts.seed --reset seed.json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from classifieds.core.errors import ClassifiedsError
from classifieds.db.session import SessionLocal, create_tables
from classifieds.services.seed import reset_store, seed_store


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Reset and/or seed the classifieds database")
    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="JSON seed document with 'users' and 'ads' arrays",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete all users, ads, conversations and messages first.",
    )
    args = parser.parse_args(argv)

    if not args.reset and args.file is None:
        parser.error("nothing to do: pass --reset and/or a seed file")

    logging.basicConfig(level=logging.INFO, format="[seed] %(message)s")
    create_tables()
    with SessionLocal() as db:
        try:
            if args.file is None:
                reset_store(db)
            else:
                document = json.loads(args.file.read_text(encoding="utf-8"))
                report = seed_store(db, document, reset=args.reset)
                print(f"[seed] created {report.users} users and {report.ads} ads")
        except (OSError, json.JSONDecodeError, SQLAlchemyError, ClassifiedsError) as exc:
            db.rollback()
            print(f"[seed] ERROR: {exc}", file=sys.stderr)
            if isinstance(exc, ClassifiedsError) and exc.errors is not None:
                print(f"[seed] {json.dumps(exc.to_payload()['errors'])}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
