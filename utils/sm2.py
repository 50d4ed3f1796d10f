import math
from datetime import date, timedelta
from typing import Optional, Sequence, Tuple

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 3.0
EASE_STEP_CORRECT = 0.1
EASE_STEP_WRONG = 0.2
FIRST_INTERVAL = 1

def clamp_ease_factor(ease_factor: float) -> float:
    return min(MAX_EASE_FACTOR, max(MIN_EASE_FACTOR, ease_factor))

def compute_next_review(
    current_interval: int,
    ease_factor: float,
    is_correct: bool,
    custom_intervals: Optional[Sequence[int]] = None,
) -> Tuple[int, float]:
    """Return (new_interval, new_ease_factor) after one review.

    With custom intervals a correct answer steps to the next rung of the
    ladder, stays on the top rung, or restarts at the bottom when the current
    interval is not on the ladder at all.
    """
    ladder = list(custom_intervals) if custom_intervals else None
    if is_correct:
        if ladder:
            if current_interval in ladder:
                index = ladder.index(current_interval)
                new_interval = ladder[min(index + 1, len(ladder) - 1)]
            else:
                new_interval = ladder[0]
        elif current_interval <= 1:
            new_interval = 2
        elif current_interval == 2:
            new_interval = 4
        else:
            new_interval = math.ceil(current_interval * ease_factor)
        # Round away float drift from repeated 0.1 steps
        new_ef = round(min(MAX_EASE_FACTOR, ease_factor + EASE_STEP_CORRECT), 4)
    else:
        new_interval = ladder[0] if ladder else FIRST_INTERVAL
        new_ef = round(max(MIN_EASE_FACTOR, ease_factor - EASE_STEP_WRONG), 4)
    return new_interval, new_ef

def next_review_date(interval: int, base_date: Optional[date] = None) -> date:
    anchor = base_date or date.today()
    return anchor + timedelta(days=max(1, interval))
