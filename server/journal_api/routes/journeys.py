"""Journey API routes."""
from fastapi import APIRouter, Depends, HTTPException, Query

from journal_core.geocoding import AddressResolver
from journal_core.models import JourneySummary as SummaryRecord
from journal_core.store import JournalStore
from journal_core.summary import summarize_journey

from ..models.journeys import (
    Journey,
    JourneyEnd,
    JourneyStart,
    RoutePoint,
    RoutePointCreate,
    Snapshot,
    SnapshotCreate,
)
from ..store_manager import get_resolvers, get_store

router = APIRouter(prefix="/api/journal", tags=["Journeys"])


@router.get("/journeys", response_model=list[Journey])
async def list_journeys(
    q: str = Query(default="", description="Substring of theme or narrative"),
    store: JournalStore = Depends(get_store),
):
    """Ended journeys matching the query, newest first."""
    return [Journey.model_validate(j) for j in store.journeys.search(q)]


@router.get("/journeys/active", response_model=Journey)
async def get_active_journey(store: JournalStore = Depends(get_store)):
    journey = store.active_journey
    if journey is None:
        raise HTTPException(status_code=404, detail="No active journey")
    return Journey.model_validate(journey)


@router.post("/journeys", response_model=Journey, status_code=201)
async def start_journey(body: JourneyStart, store: JournalStore = Depends(get_store)):
    if store.active_journey is not None:
        raise HTTPException(status_code=409, detail="A journey is already in progress")
    journey = await store.start_journey(body.theme)
    if journey is None:
        raise HTTPException(status_code=422, detail="Journey theme must not be empty")
    return Journey.model_validate(journey)


@router.post("/journeys/active/route", response_model=RoutePoint, status_code=201)
async def add_route_point(body: RoutePointCreate, store: JournalStore = Depends(get_store)):
    point = await store.add_route_point(body.latitude, body.longitude)
    if point is None:
        raise HTTPException(status_code=404, detail="No active journey")
    return RoutePoint.model_validate(point)


@router.post("/journeys/active/snapshots", response_model=Snapshot, status_code=201)
async def add_snapshot(body: SnapshotCreate, store: JournalStore = Depends(get_store)):
    snapshot = await store.add_snapshot(
        body.latitude,
        body.longitude,
        address=body.address,
        mood_rating=body.mood_rating,
        note=body.note,
    )
    if snapshot is None:
        raise HTTPException(status_code=404, detail="No active journey")
    return Snapshot.model_validate(snapshot)


@router.post("/journeys/active/end", response_model=Journey)
async def end_journey(
    body: JourneyEnd,
    store: JournalStore = Depends(get_store),
    resolvers: list[AddressResolver] = Depends(get_resolvers),
):
    """End the active journey with the given summary, or one built from its data."""
    journey = store.active_journey
    if journey is None:
        raise HTTPException(status_code=404, detail="No active journey")

    if body.summary is not None:
        summary = SummaryRecord(**body.summary.model_dump())
    else:
        summary = await summarize_journey(journey, resolvers)

    ended = await store.end_journey(summary)
    return Journey.model_validate(ended)


@router.delete("/journeys/{journey_id}", status_code=204)
async def delete_journey(journey_id: str, store: JournalStore = Depends(get_store)):
    if not await store.delete_journey(journey_id):
        raise HTTPException(status_code=404, detail=f"Journey {journey_id} not found")
