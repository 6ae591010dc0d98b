"""Round planning for the subitizing game: primary source with a local fallback.

Callers get a ``PatternResponseSchema`` every time. Validation problems with the
request (unsupported age, bad question number) still raise.
"""
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from learnbuddy.core.errors import ContentAdvisorError
from learnbuddy.schemas.pattern import (
    AdvisorSuggestion,
    Arrangement,
    PatternRequestSchema,
    PatternResponseSchema,
    RoundSpec,
)
from learnbuddy.services.content_advisor import ContentAdvisor
from learnbuddy.services.difficulty import DifficultyScheduler, RoundBounds
from learnbuddy.services.patterns import generate_pattern

logger = logging.getLogger(__name__)

DEFAULT_TIP = "Look quickly and trust your first instinct!"
DEFAULT_ENCOURAGEMENT = "You're doing great! Keep practicing!"


@dataclass(frozen=True)
class PlannedRound:
    spec: RoundSpec
    educational_tip: str | None = DEFAULT_TIP
    encouragement: str | None = DEFAULT_ENCOURAGEMENT


class RoundSource(ABC):
    """Strategy that turns a pattern request into a planned round."""

    def __init__(self, scheduler: DifficultyScheduler):
        self.scheduler = scheduler

    @abstractmethod
    async def plan(self, request: PatternRequestSchema) -> PlannedRound:
        ...


class SchedulerRoundSource(RoundSource):
    async def plan(self, request: PatternRequestSchema) -> PlannedRound:
        spec = self.scheduler.next_round(request.user_age, request.question_number, request.previous_correct)
        return PlannedRound(spec)


class FallbackRoundSource(RoundSource):
    async def plan(self, request: PatternRequestSchema) -> PlannedRound:
        spec = self.scheduler.fallback_round(request.user_age, request.question_number, request.previous_correct)
        return PlannedRound(spec)


def clamp_suggestion(suggestion: AdvisorSuggestion, bounds: RoundBounds) -> RoundSpec:
    """Fit an advisor suggestion into the scheduler's bounds for this round."""
    count = min(max(suggestion.num_objects, bounds.min_objects), bounds.max_objects)
    try:
        arrangement = Arrangement(suggestion.arrangement)
    except ValueError:
        arrangement = Arrangement.RANDOM
    time_limit = suggestion.time_limit or bounds.time_limit_ms
    time_limit = min(max(time_limit, bounds.min_time_ms), bounds.max_time_ms)
    return RoundSpec(count=count, arrangement=arrangement, time_limit_ms=time_limit)


class AdvisedRoundSource(RoundSource):
    def __init__(self, scheduler: DifficultyScheduler, advisor: ContentAdvisor):
        super().__init__(scheduler)
        self.advisor = advisor

    async def plan(self, request: PatternRequestSchema) -> PlannedRound:
        bounds = self.scheduler.bounds(request.user_age, request.question_number, request.previous_correct)
        suggestion = await self.advisor.suggest(request, bounds)
        return PlannedRound(
            spec=clamp_suggestion(suggestion, bounds),
            educational_tip=suggestion.educational_tip or DEFAULT_TIP,
            encouragement=suggestion.encouragement or DEFAULT_ENCOURAGEMENT,
        )


async def plan_round(
    request: PatternRequestSchema,
    primary: RoundSource,
    fallback: RoundSource,
) -> PlannedRound:
    # Reject unsupported input before touching any remote source
    primary.scheduler.bounds(request.user_age, request.question_number, request.previous_correct)
    try:
        return await primary.plan(request)
    except ContentAdvisorError as exc:
        logger.warning("Content advisor unavailable, using fallback round: %s", exc.detail)
        return await fallback.plan(request)


async def build_subitizing_round(
    request: PatternRequestSchema,
    advisor: ContentAdvisor | None = None,
    rng: random.Random | None = None,
) -> PatternResponseSchema:
    """Plan a round for ``request`` and lay out its tokens."""
    rng = rng or random.Random()
    scheduler = DifficultyScheduler(rng=rng)
    if advisor is not None:
        primary: RoundSource = AdvisedRoundSource(scheduler, advisor)
    else:
        primary = SchedulerRoundSource(scheduler)
    planned = await plan_round(request, primary, FallbackRoundSource(scheduler))

    pattern = generate_pattern(planned.spec, rng)
    logger.info(
        "Subitizing round: age=%s q=%s style=%s placed=%d/%d",
        request.user_age,
        request.question_number,
        planned.spec.arrangement.value,
        pattern.correct_answer,
        planned.spec.count,
    )
    return PatternResponseSchema(
        objects=list(pattern.tokens),
        correct_answer=pattern.correct_answer,
        difficulty=pattern.difficulty,
        time_limit=planned.spec.time_limit_ms,
        educational_tip=planned.educational_tip,
        encouragement=planned.encouragement,
    )
