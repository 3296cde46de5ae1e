"""Journal statistics route."""
from fastapi import APIRouter, Depends

from journal_core.stats import get_summary
from journal_core.store import JournalStore

from ..models.stats import JournalStats
from ..store_manager import get_store

router = APIRouter(prefix="/api/journal", tags=["Statistics"])


@router.get("/stats", response_model=JournalStats)
async def get_stats(store: JournalStore = Depends(get_store)):
    summary = get_summary(store.entries.entries, store.goals.goals, store.journeys.journeys)
    return JournalStats(user_name=store.user_name, is_dark_mode=store.is_dark_mode, **summary)
