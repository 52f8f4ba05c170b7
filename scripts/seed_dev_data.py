"""Seed dev exams from scripts/seed-exams.json into the configured database.

Creates the exam table when missing (there are no migrations; the schema is
Base.metadata), then inserts every exam that does not already exist with the
same subject, degree and date. Goes through ExamService so the same
validation as the API applies.

Usage:
    uv run python -m scripts.seed_dev_data [path/to/seed-exams.json]

Default path: scripts/seed-exams.json.
Requires: DATABASE_URL and JWT_SECRET (settings validation).
"""

from __future__ import annotations

import asyncio
import json
import sys
from datetime import UTC, datetime
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import select

from app.application.dtos.exam import ExamWrite
from app.application.use_cases.exams import ExamService
from app.core.config import get_settings
from app.infrastructure.persistence import database as db_mod
from app.infrastructure.persistence.models import Exam
from app.infrastructure.persistence.repositories import ExamRepository


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)
    get_settings.cache_clear()


def _parse_exam_date(s: str) -> datetime:
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def _to_command(raw: dict) -> ExamWrite:
    return ExamWrite(
        subject=raw["subject"],
        degree=raw["degree"],
        year=str(raw["year"]),
        semester=str(raw["semester"]),
        date=_parse_exam_date(raw["date"]),
        school=raw["school"],
        room=raw.get("room"),
    )


async def run(path: Path) -> None:
    _load_env()
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with path.open(encoding="utf-8") as f:
        exams = json.load(f).get("exams", [])

    db_mod._ensure_engine()
    if db_mod.AsyncSessionLocal is None:
        print("Database not configured. Set DATABASE_URL.", file=sys.stderr)
        sys.exit(1)

    async with db_mod.engine.begin() as conn:
        await conn.run_sync(db_mod.Base.metadata.create_all)

    created = skipped = 0
    async with db_mod.AsyncSessionLocal() as session:
        async with session.begin():
            exam_svc = ExamService(
                ExamRepository(session, fulltext_config=get_settings().fulltext_config)
            )
            for raw in exams:
                command = _to_command(raw)
                existing = await session.execute(
                    select(Exam.id).where(
                        Exam.subject == command.subject,
                        Exam.degree == command.degree,
                        Exam.date == command.date,
                    )
                )
                if existing.scalar_one_or_none() is not None:
                    skipped += 1
                    continue
                exam = await exam_svc.create_exam(command)
                created += 1
                print(f"Exam {exam.id}: {exam.subject} ({exam.degree}) {exam.date:%Y-%m-%d}")

    await db_mod.dispose_engine()
    print(f"Done: {created} created, {skipped} already present")


def main() -> None:
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else _project_root() / "scripts" / "seed-exams.json"
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
