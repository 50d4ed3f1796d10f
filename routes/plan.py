from fastapi import APIRouter, Depends, HTTPException

from db.database import get_db
from models.study_plan import PlanCreate
from utils.progress import get_vocabulary_stats
from utils.study_plan import (
    STUDY_PERIODS,
    calculate_progress,
    calculate_study_plan,
    create_study_plan,
    load_study_plan,
    save_study_plan,
    should_adjust_plan,
)

router = APIRouter()


@router.get("/periods")
async def list_periods():
    return {
        period.value: {**config.model_dump(), "total_daily": config.total_daily}
        for period, config in STUDY_PERIODS.items()
    }


@router.post("/{user_id}")
async def choose_plan(user_id: str, request: PlanCreate, store=Depends(get_db)):
    """Create or replace the user's plan from a period or a test date."""
    if request.period is not None:
        plan = create_study_plan(request.period, request.total_words)
    else:
        plan = calculate_study_plan(request.target_date, request.total_words)
    save_study_plan(store, user_id, plan)
    return plan.model_dump(mode="json")


@router.get("/{user_id}")
async def plan_status(user_id: str, store=Depends(get_db)):
    plan = load_study_plan(store, user_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="No study plan for this user")
    mastered = get_vocabulary_stats(store, user_id).mastered
    return {
        "plan": plan.model_dump(mode="json"),
        "mastered": mastered,
        "progress": calculate_progress(plan, mastered).model_dump(),
        "adjustment": should_adjust_plan(plan, mastered).model_dump(mode="json"),
    }
