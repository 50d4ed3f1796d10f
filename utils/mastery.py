from models.word_progress import WordStatus

MASTERED_MIN_CORRECT = 5
MASTERED_MIN_INTERVAL = 14
REVIEWING_MIN_REVIEWS = 2

def status_from_counts(review_count: int, correct_count: int, interval: int) -> str:
    """Derive a word's status from its counters; never stored independently."""
    if correct_count >= MASTERED_MIN_CORRECT and interval >= MASTERED_MIN_INTERVAL:
        return WordStatus.MASTERED.value
    if review_count >= REVIEWING_MIN_REVIEWS:
        return WordStatus.REVIEWING.value
    return WordStatus.LEARNING.value

def accuracy_percent(correct: int, total: int) -> int:
    if total <= 0:
        return 0
    return round((correct / total) * 100)
