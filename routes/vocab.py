import logging

from fastapi import APIRouter, Depends, Query

from data.vocab_list import ACT_VOCAB
from db.database import get_db
from errors import StoreUnavailableError
from models.word_progress import ReviewCreate
from utils.daily_mix import get_daily_mission, update_mission_progress
from utils.progress import (
    get_due_words,
    get_vocabulary_stats,
    record_review,
    wipe_user_progress,
)
from utils.study_plan import get_intervals_for_plan, load_study_plan

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{user_id}/mission")
async def daily_mission(user_id: str, store=Depends(get_db)):
    """Today's mission; composed on the first request of the day, reused afterwards."""
    try:
        plan = load_study_plan(store, user_id)
    except StoreUnavailableError as e:
        logger.warning("Plan store unavailable for %s: %s", user_id, e.message)
        plan = None
    mission = get_daily_mission(store, user_id, ACT_VOCAB, plan=plan)
    return {
        "mission": mission.model_dump(mode="json"),
        "daily_goal": plan.daily_goal if plan else None,
        "period": plan.period.value if plan else None,
    }


@router.post("/{user_id}/review")
async def submit_review(user_id: str, review: ReviewCreate, store=Depends(get_db)):
    plan = load_study_plan(store, user_id)
    intervals = get_intervals_for_plan(plan.period) if plan else None
    progress = record_review(store, user_id, review.word, review.is_correct, intervals=intervals)
    mission = update_mission_progress(store, user_id)
    return {
        "progress": progress.model_dump(mode="json"),
        "mission_progress": mission.progress if mission else None,
    }


@router.get("/{user_id}/due")
async def due_words(
    user_id: str,
    limit: int = Query(default=10, ge=1, le=200),
    store=Depends(get_db),
):
    return {"words": get_due_words(store, user_id, limit)}


@router.get("/{user_id}/stats")
async def vocabulary_stats(user_id: str, store=Depends(get_db)):
    return get_vocabulary_stats(store, user_id).model_dump()


@router.delete("/{user_id}")
async def wipe_user(user_id: str, store=Depends(get_db)):
    """Full data wipe for a user: progress, missions, cached drills and plan."""
    return {"removed": wipe_user_progress(store, user_id)}
