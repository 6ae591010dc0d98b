"""Next-round parameters from the child's age, question index and last answer."""
import random
from dataclasses import dataclass

from learnbuddy.core.errors import DomainValidationError
from learnbuddy.schemas.pattern import Arrangement, RoundSpec

# Extra exposure granted after a wrong answer
EASE_BACK_TIME_MS = 500


@dataclass(frozen=True)
class AgeBand:
    """Count range and exposure window for one age band.

    The upper count bound starts at ``max_objects_start`` and grows by one every
    ``ramp_every`` questions up to ``max_objects_cap`` (``ramp_every=0``: fixed).
    """

    min_age: int
    max_age: int
    min_objects: int
    max_objects_start: int
    max_objects_cap: int
    ramp_every: int
    base_time_ms: int
    time_step_ms: int
    min_time_ms: int

    def contains(self, age: int) -> bool:
        return self.min_age <= age <= self.max_age

    def upper_bound(self, question_index: int) -> int:
        if self.ramp_every:
            upper = min(self.max_objects_cap, self.max_objects_start + question_index // self.ramp_every)
        else:
            upper = self.max_objects_cap
        return max(self.min_objects, upper)

    def time_limit(self, question_index: int) -> int:
        return max(self.min_time_ms, self.base_time_ms - question_index * self.time_step_ms)


# Covers every profile age (1-18). Under-5s start below their minimum count,
# so their upper bound stays clamped at 3 until the ramp passes it.
AGE_BANDS = (
    AgeBand(1, 4, min_objects=3, max_objects_start=2, max_objects_cap=6, ramp_every=4,
            base_time_ms=4000, time_step_ms=100, min_time_ms=2000),
    AgeBand(5, 6, min_objects=5, max_objects_start=10, max_objects_cap=10, ramp_every=0,
            base_time_ms=5000, time_step_ms=100, min_time_ms=3000),
    AgeBand(7, 18, min_objects=3, max_objects_start=3, max_objects_cap=8, ramp_every=3,
            base_time_ms=4000, time_step_ms=100, min_time_ms=2000),
)


@dataclass(frozen=True)
class RoundBounds:
    """Admissible count range and exposure time for one round."""

    min_objects: int
    max_objects: int
    time_limit_ms: int
    min_time_ms: int
    max_time_ms: int


class DifficultyScheduler:
    def __init__(self, bands: tuple[AgeBand, ...] = AGE_BANDS, rng: random.Random | None = None):
        self.bands = bands
        self.rng = rng or random.Random()

    def band_for(self, age: int) -> AgeBand:
        for band in self.bands:
            if band.contains(age):
                return band
        low = min(b.min_age for b in self.bands)
        high = max(b.max_age for b in self.bands)
        raise DomainValidationError(f"userAge must be between {low} and {high}, got {age}")

    def bounds(self, age: int, question_index: int, previous_correct: bool | None = None) -> RoundBounds:
        """Count range and time limit, eased back after a wrong answer."""
        if question_index < 1:
            raise DomainValidationError(f"questionNumber must be >= 1, got {question_index}")
        band = self.band_for(age)
        lower = band.min_objects
        upper = band.upper_bound(question_index)
        time_limit = band.time_limit(question_index)
        if previous_correct is False:
            # Corrective nudge toward the easy end, not a reset
            upper = lower + (upper - lower) // 2
            time_limit = min(band.base_time_ms, time_limit + EASE_BACK_TIME_MS)
        return RoundBounds(
            min_objects=lower,
            max_objects=upper,
            time_limit_ms=time_limit,
            min_time_ms=band.min_time_ms,
            max_time_ms=band.base_time_ms,
        )

    def next_round(
        self,
        age: int,
        question_index: int,
        previous_correct: bool | None = None,
        arrangement: Arrangement | None = None,
    ) -> RoundSpec:
        b = self.bounds(age, question_index, previous_correct)
        return RoundSpec(
            count=self.rng.randint(b.min_objects, b.max_objects),
            arrangement=arrangement or self.rng.choice(list(Arrangement)),
            time_limit_ms=b.time_limit_ms,
        )

    def fallback_round(self, age: int, question_index: int, previous_correct: bool | None = None) -> RoundSpec:
        """Local default used when the content advisor cannot be reached."""
        return self.next_round(age, question_index, previous_correct, arrangement=Arrangement.RANDOM)
