import math
from datetime import date, timedelta
from typing import List, Optional

from db.store import RecordStore
from models.study_plan import (
    PlanAdjustment,
    PlanProgress,
    StudyPeriod,
    StudyPeriodConfig,
    StudyPlan,
)
from utils.dates import local_today

PLAN_TABLE = "study_plans"
DEFAULT_TOTAL_WORDS = 300
ON_TRACK_RATIO = 0.9
BEHIND_RATIO = 0.7
AHEAD_RATIO = 1.3

STUDY_PERIODS = {
    StudyPeriod.INTENSIVE: StudyPeriodConfig(
        name="Intensive",
        duration_days=14,
        new_words_per_day=22,
        review_words_per_day=18,
        intervals=[1, 2, 3, 5, 7],
        description="High-intensity crash course",
    ),
    StudyPeriod.ACCELERATED: StudyPeriodConfig(
        name="Accelerated",
        duration_days=30,
        new_words_per_day=11,
        review_words_per_day=12,
        intervals=[1, 2, 4, 7, 14],
        description="Fast-paced but sustainable",
    ),
    StudyPeriod.BALANCED: StudyPeriodConfig(
        name="Balanced",
        duration_days=60,
        new_words_per_day=6,
        review_words_per_day=10,
        intervals=[1, 2, 4, 7, 14, 21],
        description="Optimal retention and pacing",
    ),
    StudyPeriod.RELAXED: StudyPeriodConfig(
        name="Relaxed",
        duration_days=90,
        new_words_per_day=4,
        review_words_per_day=7,
        intervals=[1, 2, 4, 7, 14, 21, 30],
        description="Low-pressure deep learning",
    ),
}

# Shortest to longest
PERIOD_ORDER = [
    StudyPeriod.INTENSIVE,
    StudyPeriod.ACCELERATED,
    StudyPeriod.BALANCED,
    StudyPeriod.RELAXED,
]

# (max days remaining, period); anything longer is relaxed
PERIOD_THRESHOLDS = [
    (14, StudyPeriod.INTENSIVE),
    (30, StudyPeriod.ACCELERATED),
    (60, StudyPeriod.BALANCED),
]


def period_for_days(days: int) -> StudyPeriod:
    for limit, period in PERIOD_THRESHOLDS:
        if days <= limit:
            return period
    return StudyPeriod.RELAXED


def _build_plan(
    period: StudyPeriod,
    start: date,
    target: date,
    total_words: int,
) -> StudyPlan:
    config = STUDY_PERIODS[period]
    return StudyPlan(
        period=period,
        start_date=start,
        target_date=target,
        daily_goal=config.total_daily,
        total_words=total_words,
        new_words_per_day=config.new_words_per_day,
        review_words_per_day=config.review_words_per_day,
    )


def calculate_study_plan(
    target_date: date,
    total_words: int = DEFAULT_TOTAL_WORDS,
    today: Optional[date] = None,
) -> StudyPlan:
    """Pick the period that fits the days left before the test date."""
    today = today or local_today()
    days_until_test = (target_date - today).days
    return _build_plan(period_for_days(days_until_test), today, target_date, total_words)


def create_study_plan(
    period: StudyPeriod,
    total_words: int = DEFAULT_TOTAL_WORDS,
    today: Optional[date] = None,
) -> StudyPlan:
    """Plan for a manually chosen period, ending period.duration_days from today."""
    today = today or local_today()
    period = StudyPeriod(period)
    target = today + timedelta(days=STUDY_PERIODS[period].duration_days)
    return _build_plan(period, today, target, total_words)


def get_intervals_for_plan(period: StudyPeriod) -> List[int]:
    return list(STUDY_PERIODS[StudyPeriod(period)].intervals)


def calculate_progress(
    plan: StudyPlan,
    mastered_words: int,
    today: Optional[date] = None,
) -> PlanProgress:
    today = today or local_today()
    total_days = (plan.target_date - plan.start_date).days
    days_elapsed = (today - plan.start_date).days
    days_remaining = max(0, total_days - days_elapsed)
    percent_complete = (
        round(mastered_words / plan.total_words * 100) if plan.total_words > 0 else 0
    )
    expected_words = min(
        plan.total_words,
        math.floor(max(days_elapsed, 0) * plan.new_words_per_day),
    )
    on_track = mastered_words >= expected_words * ON_TRACK_RATIO
    words_remaining = plan.total_words - mastered_words
    words_per_day_needed = (
        max(0, math.ceil(words_remaining / days_remaining)) if days_remaining > 0 else 0
    )
    return PlanProgress(
        days_remaining=days_remaining,
        days_elapsed=days_elapsed,
        total_days=total_days,
        percent_complete=percent_complete,
        expected_words=expected_words,
        on_track=on_track,
        words_per_day_needed=words_per_day_needed,
    )


def _neighbour_period(current: StudyPeriod, step: int) -> Optional[StudyPeriod]:
    index = PERIOD_ORDER.index(StudyPeriod(current)) + step
    if 0 <= index < len(PERIOD_ORDER):
        return PERIOD_ORDER[index]
    return None


def should_adjust_plan(
    plan: StudyPlan,
    mastered_words: int,
    today: Optional[date] = None,
) -> PlanAdjustment:
    progress = calculate_progress(plan, mastered_words, today=today)
    if mastered_words < progress.expected_words * BEHIND_RATIO:
        return PlanAdjustment(
            should_adjust=True,
            reason="You're behind schedule. Consider switching to a longer study period.",
            suggested_period=_neighbour_period(plan.period, 1),
        )
    if mastered_words > progress.expected_words * AHEAD_RATIO:
        return PlanAdjustment(
            should_adjust=True,
            reason="You're ahead of schedule! You could switch to a shorter period.",
            suggested_period=_neighbour_period(plan.period, -1),
        )
    return PlanAdjustment(should_adjust=False, reason="On track!")


def save_study_plan(store: RecordStore, user_id: str, plan: StudyPlan) -> None:
    record = plan.model_dump(mode="json")
    record["user_id"] = user_id
    store.upsert(PLAN_TABLE, record)


def load_study_plan(store: RecordStore, user_id: str) -> Optional[StudyPlan]:
    rows = store.get(PLAN_TABLE, {"user_id": user_id}, limit=1)
    if not rows:
        return None
    return StudyPlan(**rows[0])
