from __future__ import annotations

import logging
import random
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from db.store import RecordStore
from models.word_progress import VocabularyStats, WordProgress, WordStatus
from utils.dates import local_today, utc_now
from utils.mastery import accuracy_percent, status_from_counts
from utils.sm2 import (
    DEFAULT_EASE_FACTOR,
    FIRST_INTERVAL,
    clamp_ease_factor,
    compute_next_review,
    next_review_date,
)

logger = logging.getLogger(__name__)

PROGRESS_TABLE = "word_progress"
REFRESH_POOL_SIZE = 100


def normalize_word(word: str) -> str:
    return word.strip().lower()


def default_progress(user_id: str, word: str, today: Optional[date] = None) -> WordProgress:
    return WordProgress(
        user_id=user_id,
        word=normalize_word(word),
        ease_factor=DEFAULT_EASE_FACTOR,
        interval=FIRST_INTERVAL,
        next_review_date=today or local_today(),
        review_count=0,
        correct_count=0,
        status=WordStatus.LEARNING,
    )


def _repair(record: Dict) -> WordProgress:
    """Build a WordProgress from a stored row, fixing inconsistent counters."""
    progress = WordProgress(**record)
    repaired = {}
    if progress.review_count < 0:
        repaired["review_count"] = 0
    review_count = repaired.get("review_count", progress.review_count)
    if progress.correct_count > review_count or progress.correct_count < 0:
        repaired["correct_count"] = min(max(progress.correct_count, 0), review_count)
    ease = clamp_ease_factor(progress.ease_factor)
    if ease != progress.ease_factor:
        repaired["ease_factor"] = ease
    if progress.interval < 1:
        repaired["interval"] = FIRST_INTERVAL
    if not repaired:
        return progress
    logger.warning(
        "Repairing progress for %s/%s: %s", progress.user_id, progress.word, repaired
    )
    progress = progress.model_copy(update=repaired)
    return progress.model_copy(
        update={
            "status": status_from_counts(
                progress.review_count, progress.correct_count, progress.interval
            )
        }
    )


def get_word_progress(store: RecordStore, user_id: str, word: str) -> Optional[WordProgress]:
    rows = store.get(PROGRESS_TABLE, {"user_id": user_id, "word": normalize_word(word)}, limit=1)
    if not rows:
        return None
    return _repair(rows[0])


def list_word_progress(store: RecordStore, user_id: str) -> List[WordProgress]:
    return [_repair(row) for row in store.get(PROGRESS_TABLE, {"user_id": user_id})]


def upsert_word_progress(store: RecordStore, progress: WordProgress) -> None:
    record = progress.model_dump(mode="json")
    store.upsert(PROGRESS_TABLE, record)


def get_due_words(
    store: RecordStore,
    user_id: str,
    limit: int = 10,
    today: Optional[date] = None,
) -> List[str]:
    """Words whose review date has arrived, soonest first."""
    if limit <= 0:
        return []
    today = today or local_today()
    rows = store.get(
        PROGRESS_TABLE,
        {
            "user_id": user_id,
            "next_review_date__lte": today,
            "status__in": [WordStatus.LEARNING.value, WordStatus.REVIEWING.value],
        },
        order_by=["next_review_date", "word"],
        limit=limit,
    )
    return [row["word"] for row in rows]


def get_random_learned_words(
    store: RecordStore,
    user_id: str,
    limit: int = 3,
    exclude: Iterable[str] = (),
) -> List[str]:
    """Random reviewing/mastered words for the refresh bucket."""
    if limit <= 0:
        return []
    rows = store.get(
        PROGRESS_TABLE,
        {
            "user_id": user_id,
            "status__in": [WordStatus.REVIEWING.value, WordStatus.MASTERED.value],
        },
        limit=REFRESH_POOL_SIZE,
    )
    skip = {normalize_word(word) for word in exclude}
    pool = [row["word"] for row in rows if row["word"] not in skip]
    random.shuffle(pool)
    return pool[:limit]


def get_new_words(
    store: RecordStore,
    user_id: str,
    all_words: Sequence[str],
    limit: int = 3,
) -> List[str]:
    """Up to `limit` lowercase words from `all_words` the user has never reviewed, shuffled."""
    if limit <= 0:
        return []
    seen = {row["word"] for row in store.get(PROGRESS_TABLE, {"user_id": user_id})}
    candidates: List[str] = []
    picked = set()
    for word in all_words:
        key = normalize_word(word)
        if not key or key in seen or key in picked:
            continue
        picked.add(key)
        candidates.append(key)
    random.shuffle(candidates)
    return candidates[:limit]


def record_review(
    store: RecordStore,
    user_id: str,
    word: str,
    is_correct: bool,
    intervals: Optional[Sequence[int]] = None,
    today: Optional[date] = None,
) -> WordProgress:
    """Apply one review outcome to a word and persist it with a single write."""
    today = today or local_today()
    progress = get_word_progress(store, user_id, word) or default_progress(user_id, word, today)
    new_interval, new_ef = compute_next_review(
        progress.interval, progress.ease_factor, is_correct, intervals
    )
    review_count = progress.review_count + 1
    correct_count = progress.correct_count + (1 if is_correct else 0)
    updated = progress.model_copy(
        update={
            "interval": new_interval,
            "ease_factor": new_ef,
            "review_count": review_count,
            "correct_count": correct_count,
            "next_review_date": next_review_date(new_interval, today),
            "last_reviewed_at": utc_now(),
            "status": status_from_counts(review_count, correct_count, new_interval),
        }
    )
    upsert_word_progress(store, updated)
    logger.debug(
        "Reviewed %s for %s: correct=%s interval=%d ef=%.2f status=%s",
        updated.word, user_id, is_correct, updated.interval, updated.ease_factor, updated.status,
    )
    return updated


def get_vocabulary_stats(store: RecordStore, user_id: str) -> VocabularyStats:
    rows = list_word_progress(store, user_id)
    counts = {status.value: 0 for status in WordStatus}
    for row in rows:
        counts[row.status] = counts.get(row.status, 0) + 1
    total_reviews = sum(row.review_count for row in rows)
    total_correct = sum(row.correct_count for row in rows)
    return VocabularyStats(
        total=len(rows),
        learning=counts[WordStatus.LEARNING.value],
        reviewing=counts[WordStatus.REVIEWING.value],
        mastered=counts[WordStatus.MASTERED.value],
        total_reviews=total_reviews,
        accuracy=accuracy_percent(total_correct, total_reviews),
    )


def mastered_words(store: RecordStore, user_id: str, words: Iterable[str]) -> List[str]:
    keys = [normalize_word(word) for word in words]
    if not keys:
        return []
    rows = store.get(
        PROGRESS_TABLE,
        {"user_id": user_id, "word__in": keys, "status": WordStatus.MASTERED.value},
    )
    return [row["word"] for row in rows]


def wipe_user_progress(store: RecordStore, user_id: str) -> Dict[str, int]:
    """Remove every record the engine keeps for a user."""
    removed = {}
    for table in ("word_progress", "daily_missions", "drill_cache", "study_plans"):
        removed[table] = store.delete(table, {"user_id": user_id})
    logger.info("Wiped data for %s: %s", user_id, removed)
    return removed
