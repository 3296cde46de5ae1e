#!/usr/bin/env python3
"""
Seed the journal storage with demo data.

Creates a handful of entries, two goals with check-in history and one
completed journey in the SQLite storage used by the API.

Usage:
    python scripts/seed_journal.py
    python scripts/seed_journal.py --user demo-user --reset
"""
import argparse
import asyncio
import sys
from datetime import date, datetime, timedelta
from pathlib import Path

# Base directory (project root)
BASE_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BASE_DIR / "src"))

from journal_core.config import get_settings  # noqa: E402
from journal_core.models import Mood  # noqa: E402
from journal_core.persistence import PersistenceAdapter  # noqa: E402
from journal_core.storage import SQLiteStorage  # noqa: E402
from journal_core.store import JournalStore  # noqa: E402
from journal_core.summary import build_journey_summary  # noqa: E402


DEMO_ENTRIES = [
    ("Quiet morning with coffee and a long walk by the river.", Mood.HAPPY, "Slow start", ["walk", "morning"]),
    ("Deadline moved again. Frustrating but manageable.", Mood.NEUTRAL, "Work", ["work"]),
    ("Dinner with old friends, laughed until midnight.", Mood.AMAZING, "Reunion", ["friends"]),
    ("Couldn't sleep, too much on my mind.", Mood.SAD, None, ["sleep"]),
]


async def seed_store(store: JournalStore, today: date) -> dict:
    """
    Fill a loaded store with demo data.

    Returns:
        Counts of created items
    """
    for offset, (content, mood, title, tags) in enumerate(DEMO_ENTRIES):
        filed = datetime.combine(today - timedelta(days=offset), datetime.min.time()).replace(hour=9)
        await store.add_entry(content, mood, filed.isoformat(), title=title, tags=tags)

    reading = await store.add_goal("Read 20 pages", "Every evening before bed", 30)
    for offset in (3, 2, 1):
        await store.check_in_goal(reading.id, today=today - timedelta(days=offset))

    stretching = await store.add_goal("Stretch", "Ten minutes after waking up", 7, is_active=False)
    await store.check_in_goal(stretching.id, today=today - timedelta(days=5))

    started = datetime.now().astimezone() - timedelta(hours=1, minutes=20)
    journey = await store.start_journey("Evening loop around the park", now=started)
    await store.add_route_point(51.5079, -0.0877, now=started)
    await store.add_snapshot(
        51.5081, -0.0860, address="RIVER WALK, LONDON, ENGLAND", mood_rating=8, note="Sunset over the water",
    )
    await store.add_route_point(51.5101, -0.0830)
    summary = build_journey_summary(journey, "RIVER WALK, LONDON, ENGLAND", "PARK LANE, LONDON, ENGLAND")
    await store.end_journey(summary)

    return {
        "entries": len(store.entries),
        "goals": len(store.goals),
        "journeys": len(store.journeys),
    }


async def run(user_id: str | None, reset: bool) -> None:
    settings = get_settings()
    storage = SQLiteStorage(settings.storage_db_path)
    adapter = PersistenceAdapter(storage, user_id=user_id, settings=settings)

    if reset:
        await adapter.clear()
        print(f"  Cleared existing record: {adapter.key}")

    store = JournalStore(adapter)
    await store.load()
    counts = await seed_store(store, date.today())

    print(f"  Storage: {settings.storage_db_path}")
    print(f"  Key: {adapter.key}")
    for name, count in counts.items():
        print(f"  {name}: {count}")
    if store.last_save and not store.last_save.saved:
        print(f"  WARNING: last save failed: {store.last_save.error}")


def main():
    parser = argparse.ArgumentParser(description="Seed the journal storage with demo data")
    parser.add_argument("--user", default=None, help="User id whose record is seeded")
    parser.add_argument("--reset", action="store_true", help="Remove the existing record first")
    args = parser.parse_args()

    print("=" * 60)
    print("Journal Demo Data Seeder")
    print("=" * 60)
    asyncio.run(run(args.user, args.reset))
    print("=" * 60)


if __name__ == "__main__":
    main()
