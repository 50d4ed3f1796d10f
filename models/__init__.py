from .word_progress import WordProgress, WordStatus, ReviewCreate, VocabularyStats
from .mission import DailyMission
from .drill import DrillContent, DrillRequest, DrillCacheStats
from .study_plan import (
    StudyPeriod,
    StudyPeriodConfig,
    StudyPlan,
    PlanProgress,
    PlanAdjustment,
    PlanCreate,
)

__all__ = [
    'WordProgress', 'WordStatus', 'ReviewCreate', 'VocabularyStats',
    'DailyMission',
    'DrillContent', 'DrillRequest', 'DrillCacheStats',
    'StudyPeriod', 'StudyPeriodConfig', 'StudyPlan', 'PlanProgress', 'PlanAdjustment', 'PlanCreate',
]
