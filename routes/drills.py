from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException

from db.database import get_db
from models.drill import DrillRequest
from utils.drill_cache import DrillCache
from utils.drills import DrillGenerator, OllamaDrillGenerator

router = APIRouter()


@lru_cache(maxsize=1)
def get_drill_generator() -> DrillGenerator:
    """One generator per process so its rate limiter sees every request."""
    return OllamaDrillGenerator()


def get_drill_cache(
    store=Depends(get_db),
    generator: DrillGenerator = Depends(get_drill_generator),
) -> DrillCache:
    return DrillCache(store, generator)


@router.post("/{user_id}/daily")
async def daily_drills(user_id: str, request: DrillRequest, cache=Depends(get_drill_cache)):
    drills = await cache.get_daily_vocab_drills(user_id, request.words)
    return {"drills": {word: drill.to_record() for word, drill in drills.items()}}


@router.get("/{user_id}/stats")
async def drill_cache_stats(user_id: str, cache=Depends(get_drill_cache)):
    return cache.get_drill_cache_stats(user_id).model_dump()


@router.get("/{user_id}/{word}")
async def cached_drill(user_id: str, word: str, cache=Depends(get_drill_cache)):
    drill = cache.get_cached_drill(user_id, word)
    if drill is None:
        raise HTTPException(status_code=404, detail="No drill cached today for this word")
    return drill.to_record()


@router.delete("/{user_id}")
async def clear_drills(user_id: str, cache=Depends(get_drill_cache)):
    return {"removed": cache.clear_drill_cache(user_id)}
