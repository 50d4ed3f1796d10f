from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date
from enum import Enum

class StudyPeriod(str, Enum):
    INTENSIVE = "intensive"
    ACCELERATED = "accelerated"
    BALANCED = "balanced"
    RELAXED = "relaxed"

class StudyPeriodConfig(BaseModel):
    name: str
    duration_days: int
    new_words_per_day: int
    review_words_per_day: int
    intervals: List[int]
    description: str

    @property
    def total_daily(self) -> int:
        return self.new_words_per_day + self.review_words_per_day

class StudyPlan(BaseModel):
    period: StudyPeriod
    start_date: date
    target_date: date
    daily_goal: int
    total_words: int = 300
    new_words_per_day: int
    review_words_per_day: int

    class Config:
        from_attributes = True

class PlanProgress(BaseModel):
    days_remaining: int
    days_elapsed: int
    total_days: int
    percent_complete: int
    expected_words: int
    on_track: bool
    words_per_day_needed: int

class PlanAdjustment(BaseModel):
    should_adjust: bool
    reason: str
    suggested_period: Optional[StudyPeriod] = None

class PlanCreate(BaseModel):
    period: Optional[StudyPeriod] = None
    target_date: Optional[date] = None
    total_words: int = Field(default=300, gt=0)

    @model_validator(mode="after")
    def one_source(self):
        if (self.period is None) == (self.target_date is None):
            raise ValueError("Provide exactly one of 'period' or 'target_date'")
        return self
