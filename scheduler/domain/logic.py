"""SM-2 interval and easiness computation. Pure arithmetic, no storage."""

import math
from dataclasses import dataclass
from datetime import datetime

from ..config import (
    FIRST_INTERVAL_DAYS,
    LAPSE_INTERVAL_DAYS,
    MAX_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASINESS_FACTOR,
    SUCCESS_THRESHOLD,
)
from ..utils.time import add_days


@dataclass(frozen=True)
class ReviewOutcome:
    easiness_factor: float
    repetitions: int
    interval: int
    next_review_date: datetime


def next_easiness(easiness_factor: float, quality) -> float:
    miss = MAX_QUALITY - quality
    new_ef = easiness_factor + (0.1 - miss * (0.08 + miss * 0.02))
    # NaN also falls through to the floor
    return new_ef if new_ef >= MIN_EASINESS_FACTOR else MIN_EASINESS_FACTOR


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def is_success(quality) -> bool:
    return quality >= SUCCESS_THRESHOLD


def schedule_next(
    quality,
    easiness_factor: float,
    repetitions: int,
    interval: int,
    now: datetime,
) -> ReviewOutcome:
    # quality is not range-checked here; any number yields a valid outcome
    new_ef = next_easiness(easiness_factor, quality)

    if is_success(quality):
        repetitions += 1
        if repetitions in FIRST_INTERVAL_DAYS:
            interval = FIRST_INTERVAL_DAYS[repetitions]
        else:
            proposed = round_half_up(min(interval, MAX_INTERVAL_DAYS) * new_ef)
            interval = max(min(proposed, MAX_INTERVAL_DAYS), 0)
    else:
        repetitions = 0
        interval = LAPSE_INTERVAL_DAYS

    return ReviewOutcome(
        easiness_factor=new_ef,
        repetitions=repetitions,
        interval=interval,
        next_review_date=add_days(now, interval),
    )
