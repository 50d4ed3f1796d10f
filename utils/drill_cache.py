from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional, Sequence

from db.store import RecordStore
from errors import InvalidDrillError, StoreUnavailableError
from models.drill import DrillCacheStats, DrillContent
from utils.dates import local_today, parse_day
from utils.drills import DrillGenerator, parse_drill
from utils.progress import normalize_word

logger = logging.getLogger(__name__)

CACHE_TABLE = "drill_cache"


class DrillCache:
    """Day-scoped drill cache: at most one generation per (user, word, day).

    Two callers that miss on the same words at the same time will both call
    the generator; the later write wins on the shared key.
    """

    def __init__(self, store: RecordStore, generator: DrillGenerator):
        self.store = store
        self.generator = generator

    def _load_today(
        self, user_id: str, words: Sequence[str], today: date
    ) -> Dict[str, DrillContent]:
        rows = self.store.get(
            CACHE_TABLE,
            {"user_id": user_id, "generated_date": today, "word__in": list(words)},
        )
        cached: Dict[str, DrillContent] = {}
        for row in rows:
            word = normalize_word(row["word"])
            try:
                cached[word] = parse_drill(row.get("drill_data"), word=word)
            except InvalidDrillError as e:
                # Treated as a miss so the word is generated again
                logger.warning("Discarding malformed cached drill for %r: %s", word, e.message)
        return cached

    def _save(self, user_id: str, drills: Dict[str, DrillContent], today: date) -> int:
        saved = 0
        for word, drill in drills.items():
            try:
                self.store.upsert(
                    CACHE_TABLE,
                    {
                        "user_id": user_id,
                        "word": word,
                        "generated_date": today,
                        "drill_data": drill.to_record(),
                    },
                )
                saved += 1
            except StoreUnavailableError as e:
                logger.error("Could not cache drill for %r: %s", word, e.message)
                break
        return saved

    async def get_daily_vocab_drills(
        self,
        user_id: str,
        words: Sequence[str],
        today: Optional[date] = None,
    ) -> Dict[str, DrillContent]:
        """Drills for `words` keyed by lowercase word; generates only what's missing."""
        today = today or local_today()
        keys: List[str] = []
        for word in words:
            key = normalize_word(word)
            if key and key not in keys:
                keys.append(key)
        if not keys:
            return {}

        try:
            cached = self._load_today(user_id, keys, today)
        except StoreUnavailableError as e:
            logger.warning("Drill cache unavailable (%s); generating without cache", e.message)
            return await self.generator.generate_batch(keys)

        to_generate = [key for key in keys if key not in cached]
        if not to_generate:
            logger.info("Serving %d drills for %s from cache", len(cached), user_id)
            return cached

        logger.info(
            "Generating drills for %d of %d words for %s", len(to_generate), len(keys), user_id
        )
        generated = await self.generator.generate_batch(to_generate)
        fresh = {
            normalize_word(word): drill
            for word, drill in generated.items()
            if normalize_word(word) in to_generate
        }
        saved = self._save(user_id, fresh, today)
        logger.info("Cached %d new drills for %s", saved, user_id)
        return {**cached, **fresh}

    def get_cached_drill(
        self,
        user_id: str,
        word: str,
        today: Optional[date] = None,
    ) -> Optional[DrillContent]:
        """Today's cached drill for one word, or None."""
        today = today or local_today()
        key = normalize_word(word)
        try:
            cached = self._load_today(user_id, [key], today)
        except StoreUnavailableError:
            return None
        return cached.get(key)

    def clear_drill_cache(self, user_id: str) -> int:
        removed = self.store.delete(CACHE_TABLE, {"user_id": user_id})
        logger.info("Cleared %d cached drills for %s", removed, user_id)
        return removed

    def get_drill_cache_stats(
        self,
        user_id: str,
        today: Optional[date] = None,
    ) -> DrillCacheStats:
        today = today or local_today()
        try:
            rows = self.store.get(CACHE_TABLE, {"user_id": user_id})
        except StoreUnavailableError:
            return DrillCacheStats()
        dates = sorted(
            day for day in (parse_day(row["generated_date"]) for row in rows) if day
        )
        return DrillCacheStats(
            total_cached=len(rows),
            cached_today=sum(1 for day in dates if day == today),
            oldest_date=dates[0].isoformat() if dates else None,
        )

    def prune_drill_cache(self, before: date) -> int:
        """Delete drills generated before `before` for every user."""
        removed = self.store.delete(CACHE_TABLE, {"generated_date__lt": before})
        if removed:
            logger.info("Pruned %d drills generated before %s", removed, before)
        return removed
