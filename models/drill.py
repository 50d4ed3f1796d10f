from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

class DrillContent(BaseModel):
    """A generated practice question for one vocabulary word.

    Field names are exchanged in camelCase with the front-end and the model;
    unknown keys are kept so the shape survives the cache unchanged.
    """
    type: str
    content: str
    options: List[str]
    correct_answer: str = Field(alias="correctAnswer")
    explanation: str
    passage: Optional[str] = None
    underlined_text: Optional[str] = Field(default=None, alias="underlinedText")
    question_text: Optional[str] = Field(default=None, alias="questionText")
    explanation_summary: Optional[str] = Field(default=None, alias="explanationSummary")
    explanation_korean: Optional[str] = Field(default=None, alias="explanationKorean")
    has_no_change: Optional[bool] = Field(default=None, alias="hasNoChange")
    answer_labels: Optional[List[str]] = Field(default=None, alias="answerLabels")

    class Config:
        populate_by_name = True
        extra = "allow"

    @field_validator("type", "content", "correct_answer", "explanation")
    @classmethod
    def not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("options")
    @classmethod
    def enough_options(cls, v):
        if any(not option or not option.strip() for option in v):
            raise ValueError("options must not be blank")
        if len(v) < 2:
            raise ValueError("a drill needs at least two options")
        return v

    def to_record(self) -> dict:
        """Serialize with the camelCase keys the drill was received with."""
        return self.model_dump(by_alias=True, exclude_none=True)

class DrillRequest(BaseModel):
    words: List[str] = Field(min_length=1)

class DrillCacheStats(BaseModel):
    total_cached: int = 0
    cached_today: int = 0
    oldest_date: Optional[str] = None
