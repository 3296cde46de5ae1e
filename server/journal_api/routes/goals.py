"""Goal API routes."""
from fastapi import APIRouter, Depends, HTTPException, Query

from journal_core.store import JournalStore

from ..models.goals import CheckInResult, Goal, GoalCreate, GoalUpdate
from ..store_manager import get_store

router = APIRouter(prefix="/api/journal", tags=["Goals"])


@router.get("/goals", response_model=list[Goal])
async def list_goals(
    q: str = Query(default="", description="Substring of title or description"),
    store: JournalStore = Depends(get_store),
):
    return [Goal.model_validate(g) for g in store.goals.search(q)]


@router.post("/goals", response_model=Goal, status_code=201)
async def create_goal(body: GoalCreate, store: JournalStore = Depends(get_store)):
    goal = await store.add_goal(**body.model_dump())
    return Goal.model_validate(goal)


@router.patch("/goals/{goal_id}", response_model=Goal)
async def update_goal(goal_id: str, body: GoalUpdate, store: JournalStore = Depends(get_store)):
    goal = await store.update_goal(goal_id, body.model_dump(exclude_unset=True, exclude_none=True))
    if goal is None:
        raise HTTPException(status_code=404, detail=f"Goal {goal_id} not found")
    return Goal.model_validate(goal)


@router.delete("/goals/{goal_id}", status_code=204)
async def delete_goal(goal_id: str, store: JournalStore = Depends(get_store)):
    if not await store.delete_goal(goal_id):
        raise HTTPException(status_code=404, detail=f"Goal {goal_id} not found")


@router.post("/goals/{goal_id}/check-in", response_model=CheckInResult)
async def check_in(goal_id: str, store: JournalStore = Depends(get_store)):
    """
    Check a goal in for today.

    A second check-in on the same day is accepted but not recorded.
    """
    if store.goals.get(goal_id) is None:
        raise HTTPException(status_code=404, detail=f"Goal {goal_id} not found")

    event = await store.check_in_goal(goal_id)
    goal = store.goals.get(goal_id)

    if event is None:
        return CheckInResult(
            recorded=False,
            message="Already checked in today",
            goal=Goal.model_validate(goal),
        )
    return CheckInResult(
        recorded=True,
        achieved=event.event_type == "achieved",
        message=event.message,
        goal=Goal.model_validate(goal),
    )
