"""Journal entry API routes."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from journal_core.store import JournalStore

from ..models.entries import Entry, EntryCreate, EntryUpdate
from ..store_manager import get_store

router = APIRouter(prefix="/api/journal", tags=["Entries"])

REQUIRED_ENTRY_FIELDS = ("content", "mood", "date", "is_favorite")


def _to_entry(entry) -> Entry:
    return Entry.model_validate(entry)


@router.get("/entries", response_model=list[Entry])
async def list_entries(
    q: str = Query(default="", description="Substring of content or title"),
    tags: list[str] = Query(default=[], description="Match entries sharing any tag"),
    favorites: bool = Query(default=False, description="Only favorite entries"),
    on: Optional[date] = Query(default=None, description="Only entries filed on this day"),
    store: JournalStore = Depends(get_store),
):
    """List entries newest first, applying the optional filters."""
    entries = store.entries.filter(query=q, tags=tags, favorites_only=favorites, on_date=on)
    return [_to_entry(e) for e in entries]


@router.post("/entries", response_model=Entry, status_code=201)
async def create_entry(body: EntryCreate, store: JournalStore = Depends(get_store)):
    fields = body.model_dump(exclude={"content", "mood", "date"}, exclude_none=True)
    entry = await store.add_entry(body.content, body.mood, body.date, **fields)
    return _to_entry(entry)


@router.patch("/entries/{entry_id}", response_model=Entry)
async def update_entry(entry_id: str, body: EntryUpdate, store: JournalStore = Depends(get_store)):
    changes = body.model_dump(exclude_unset=True)
    # Optional details may be cleared with null; the rest keep their value
    for name in REQUIRED_ENTRY_FIELDS:
        if changes.get(name, "") is None:
            del changes[name]
    entry = await store.update_entry(entry_id, changes)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Entry {entry_id} not found")
    return _to_entry(entry)


@router.delete("/entries/{entry_id}", status_code=204)
async def delete_entry(entry_id: str, store: JournalStore = Depends(get_store)):
    if not await store.delete_entry(entry_id):
        raise HTTPException(status_code=404, detail=f"Entry {entry_id} not found")


@router.post("/entries/{entry_id}/favorite", response_model=Entry)
async def toggle_favorite(entry_id: str, store: JournalStore = Depends(get_store)):
    entry = await store.toggle_favorite(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Entry {entry_id} not found")
    return _to_entry(entry)


@router.get("/tags", response_model=list[str])
async def list_tags(store: JournalStore = Depends(get_store)):
    """Distinct tags across all entries."""
    return store.all_tags()
