from __future__ import annotations

import logging
import math
import random
from datetime import date
from typing import List, Optional, Sequence

from config import get_config_value
from db.store import RecordStore
from errors import StoreUnavailableError
from models.mission import DailyMission
from models.study_plan import StudyPlan
from utils.dates import local_today, parse_day
from utils.progress import (
    get_due_words,
    get_new_words,
    get_random_learned_words,
    mastered_words,
    normalize_word,
)

logger = logging.getLogger(__name__)

MISSION_TABLE = "daily_missions"
DUE_SHARE = 0.4
REFRESH_SHARE = 0.3


def _dedupe(words: Sequence[str]) -> List[str]:
    seen = set()
    result = []
    for word in words:
        key = normalize_word(word)
        if key in seen:
            continue
        seen.add(key)
        result.append(word)
    return result


def _fallback_new_words(all_words: Sequence[str], limit: int) -> List[str]:
    """New words straight from the word list, used when the store is down."""
    pool = _dedupe([normalize_word(word) for word in all_words if word and word.strip()])
    random.shuffle(pool)
    return pool[:limit]


def get_daily_word_mix(
    store: RecordStore,
    user_id: str,
    all_words: Sequence[str],
    target_count: int = 10,
    today: Optional[date] = None,
) -> List[str]:
    """Blend due, refresh and new words (40/30/rest) into one shuffled list.

    If the store cannot be read the due and refresh buckets come back empty
    and every slot is filled from `all_words`.
    """
    if target_count <= 0:
        return []
    try:
        due_words = get_due_words(store, user_id, math.ceil(target_count * DUE_SHARE), today=today)
        refresh_words = get_random_learned_words(
            store, user_id, math.ceil(target_count * REFRESH_SHARE), exclude=due_words
        )
        new_count = target_count - len(due_words) - len(refresh_words)
        new_words = get_new_words(store, user_id, all_words, max(1, new_count))
    except StoreUnavailableError as e:
        logger.warning("Progress store unavailable (%s); mix uses new words only", e.message)
        due_words, refresh_words = [], []
        new_words = _fallback_new_words(all_words, target_count)
    mix = _dedupe(due_words + refresh_words + new_words)
    random.shuffle(mix)
    return mix[:target_count]



def get_daily_mix_for_plan(
    store: RecordStore,
    user_id: str,
    all_words: Sequence[str],
    plan: StudyPlan,
    today: Optional[date] = None,
) -> List[str]:
    """Due and new words in the plan's review/new split; no refresh bucket."""
    try:
        due_words = get_due_words(store, user_id, plan.review_words_per_day, today=today)
        new_words = get_new_words(store, user_id, all_words, plan.new_words_per_day)
    except StoreUnavailableError as e:
        logger.warning("Progress store unavailable (%s); plan mix uses new words only", e.message)
        due_words = []
        new_words = _fallback_new_words(all_words, plan.new_words_per_day)
    mix = _dedupe(due_words + new_words)
    random.shuffle(mix)
    return mix[: plan.daily_goal]



def get_stored_mission(
    store: RecordStore,
    user_id: str,
    today: Optional[date] = None,
) -> Optional[DailyMission]:
    """The mission stored for `today`; rows for other days are ignored."""
    today = today or local_today()
    rows = store.get(MISSION_TABLE, {"user_id": user_id, "date": today}, limit=1)
    if not rows:
        return None
    row = rows[0]
    words = row.get("words")
    if not isinstance(words, list) or not all(isinstance(word, str) for word in words):
        logger.warning("Discarding malformed mission for %s on %s", user_id, row.get("date"))
        words = []
    return DailyMission(
        user_id=user_id,
        date=parse_day(row["date"]),
        words=words,
        progress=max(int(row.get("progress") or 0), 0),
    )


def save_mission(store: RecordStore, mission: DailyMission) -> None:
    store.upsert(MISSION_TABLE, mission.model_dump(mode="json"))


def get_daily_mission(
    store: RecordStore,
    user_id: str,
    all_words: Sequence[str],
    daily_goal: Optional[int] = None,
    plan: Optional[StudyPlan] = None,
    today: Optional[date] = None,
) -> DailyMission:
    """Return today's mission, composing and storing it on the first call of the day."""
    today = today or local_today()
    try:
        stored = get_stored_mission(store, user_id, today)
    except StoreUnavailableError as e:
        logger.warning("Mission store unavailable (%s); composing an unsaved mission", e.message)
        stored = None
    if stored and stored.words:
        return stored

    if plan is not None:
        words = get_daily_mix_for_plan(store, user_id, all_words, plan, today=today)
    else:
        if daily_goal is None:
            daily_goal = get_config_value("schedule", "daily_goal", 10)
        words = get_daily_word_mix(store, user_id, all_words, daily_goal, today=today)
    mission = DailyMission(user_id=user_id, date=today, words=words, progress=0)
    try:
        save_mission(store, mission)
    except StoreUnavailableError as e:
        logger.warning("Could not save mission for %s: %s", user_id, e.message)
        return mission
    logger.info("Issued %d-word mission for %s on %s", len(words), user_id, today)
    return mission


def update_mission_progress(
    store: RecordStore,
    user_id: str,
    today: Optional[date] = None,
) -> Optional[DailyMission]:
    """Recount mastered mission words; progress never goes down within a day."""
    today = today or local_today()
    mission = get_stored_mission(store, user_id, today)
    if mission is None:
        return None
    count = len(mastered_words(store, user_id, mission.words))
    if count <= mission.progress:
        return mission
    mission = mission.model_copy(update={"progress": count})
    save_mission(store, mission)
    return mission
