from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from enum import Enum

class WordStatus(str, Enum):
    LEARNING = "learning"
    REVIEWING = "reviewing"
    MASTERED = "mastered"

class WordProgress(BaseModel):
    user_id: str
    word: str
    ease_factor: float = 2.5
    interval: int = 1
    next_review_date: date
    review_count: int = 0
    correct_count: int = 0
    last_reviewed_at: Optional[datetime] = None
    status: WordStatus = WordStatus.LEARNING

    class Config:
        from_attributes = True
        use_enum_values = True

class ReviewCreate(BaseModel):
    word: str = Field(min_length=1)
    is_correct: bool

class VocabularyStats(BaseModel):
    total: int = 0
    learning: int = 0
    reviewing: int = 0
    mastered: int = 0
    total_reviews: int = 0
    accuracy: int = 0
