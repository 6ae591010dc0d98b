import random

import pytest

from learnbuddy.core.errors import DomainValidationError
from learnbuddy.schemas.catalog import UserCreateSchema
from learnbuddy.schemas.pattern import Arrangement
from learnbuddy.services.difficulty import AGE_BANDS, DifficultyScheduler


@pytest.fixture
def scheduler():
    return DifficultyScheduler(rng=random.Random(1234))


@pytest.mark.parametrize("age", [3, 5, 6, 7, 10])
@pytest.mark.parametrize("previous_correct", [None, True, False])
def test_time_limit_never_increases_with_question_index(scheduler, age, previous_correct):
    band = scheduler.band_for(age)
    limits = [scheduler.bounds(age, q, previous_correct).time_limit_ms for q in range(1, 60)]

    assert all(later <= earlier for earlier, later in zip(limits, limits[1:]))
    assert min(limits) >= band.min_time_ms


@pytest.mark.parametrize("age", [4, 6, 9])
@pytest.mark.parametrize("question", range(1, 25))
def test_wrong_answer_eases_back(scheduler, age, question):
    after_correct = scheduler.bounds(age, question, previous_correct=True)
    after_wrong = scheduler.bounds(age, question, previous_correct=False)

    assert after_wrong.max_objects <= after_correct.max_objects
    assert after_wrong.min_objects == after_correct.min_objects
    assert after_wrong.time_limit_ms >= after_correct.time_limit_ms
    assert after_wrong.time_limit_ms <= after_wrong.max_time_ms


def test_wrong_answer_is_a_nudge_not_a_reset(scheduler):
    # 7+ band at question 30: range 3-8, eased to 3-5
    assert scheduler.bounds(9, 30, previous_correct=True).max_objects == 8
    assert scheduler.bounds(9, 30, previous_correct=False).max_objects == 5


def test_age_six_first_question_stays_in_band(scheduler):
    for _ in range(200):
        spec = scheduler.next_round(6, 1)
        assert 5 <= spec.count <= 10
        assert spec.time_limit_ms >= 3000
    assert scheduler.next_round(6, 1).time_limit_ms == 4900


def test_older_children_ramp_up_count():
    scheduler = DifficultyScheduler()

    assert scheduler.bounds(8, 1).max_objects == 3
    assert scheduler.bounds(8, 6).max_objects == 5
    assert scheduler.bounds(8, 40).max_objects == 8


def test_youngest_band_upper_never_below_lower():
    scheduler = DifficultyScheduler()
    bounds = scheduler.bounds(3, 1, previous_correct=False)

    assert bounds.min_objects == bounds.max_objects == 3
    assert bounds.time_limit_ms == 4000


def test_youngest_band_ramps_to_six():
    scheduler = DifficultyScheduler()

    assert scheduler.bounds(4, 1).max_objects == 3
    assert scheduler.bounds(4, 8).max_objects == 4
    assert scheduler.bounds(4, 40).max_objects == 6
    assert scheduler.bounds(4, 1).time_limit_ms == 3900
    assert scheduler.bounds(4, 40).time_limit_ms == 2000


@pytest.mark.parametrize("age", range(1, 19))
def test_every_profile_age_gets_a_round(scheduler, age):
    spec = scheduler.next_round(age, 1)

    assert spec.count >= 3
    assert spec.time_limit_ms >= 2000


def test_every_arrangement_is_reachable(scheduler):
    seen = {scheduler.next_round(7, 5).arrangement for _ in range(200)}

    assert seen == set(Arrangement)


def test_fallback_round_uses_random_layout(scheduler):
    spec = scheduler.fallback_round(6, 3, previous_correct=False)

    assert spec.arrangement == Arrangement.RANDOM
    assert 5 <= spec.count <= 7
    assert spec.time_limit_ms == 5000


@pytest.mark.parametrize("age", [0, -1, 19, 40])
def test_unsupported_age_is_rejected(scheduler, age):
    with pytest.raises(DomainValidationError):
        scheduler.next_round(age, 1)


def test_question_numbers_start_at_one(scheduler):
    with pytest.raises(DomainValidationError):
        scheduler.bounds(6, 0)


def test_bands_do_not_overlap():
    ages = [age for band in AGE_BANDS for age in range(band.min_age, band.max_age + 1)]
    assert len(ages) == len(set(ages))


def test_bands_cover_profile_age_range():
    age_field = UserCreateSchema.model_fields["age"]
    limits = {type(m).__name__: m for m in age_field.metadata}
    ages = {age for band in AGE_BANDS for age in range(band.min_age, band.max_age + 1)}

    assert ages == set(range(limits["Ge"].ge, limits["Le"].le + 1))
