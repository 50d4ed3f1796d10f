from pydantic import BaseModel, Field
from typing import List
from datetime import date

class DailyMission(BaseModel):
    user_id: str
    date: date
    words: List[str] = Field(default_factory=list)
    progress: int = 0

    class Config:
        from_attributes = True
