import json
import random

import httpx
import pytest

from learnbuddy.core.errors import ContentAdvisorError, DomainValidationError
from learnbuddy.schemas.pattern import AdvisorSuggestion, Arrangement, PatternRequestSchema
from learnbuddy.services.content_advisor import ContentAdvisor, extract_json_object
from learnbuddy.services.difficulty import DifficultyScheduler
from learnbuddy.services.patterns import DICE_PATTERNS
from learnbuddy.services.subitizing import (
    DEFAULT_ENCOURAGEMENT,
    DEFAULT_TIP,
    RoundSource,
    build_subitizing_round,
    clamp_suggestion,
)

API_URL = "https://advisor.test/v1/chat/completions"


class StubAdvisor:
    def __init__(self, suggestion=None, error=None):
        self.suggestion = suggestion
        self.error = error
        self.calls = 0

    async def suggest(self, request, bounds):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.suggestion


def request(age=6, question=1, previous_correct=None):
    return PatternRequestSchema(user_age=age, difficulty=1, question_number=question, previous_correct=previous_correct)


def chat_response(content, status_code=200):
    def handler(http_request):
        return httpx.Response(status_code, json={"choices": [{"message": {"content": content}}]})
    return handler


def advisor_with(handler):
    return ContentAdvisor(api_key="test-key", api_url=API_URL, model="test-model", transport=httpx.MockTransport(handler))


async def test_local_round_without_advisor():
    response = await build_subitizing_round(request(age=6), rng=random.Random(5))

    assert response.correct_answer == len(response.objects)
    assert 1 <= response.correct_answer <= 10
    assert response.time_limit == 4900
    assert response.educational_tip == DEFAULT_TIP
    assert response.encouragement == DEFAULT_ENCOURAGEMENT


async def test_advisor_suggestion_is_used():
    advisor = StubAdvisor(AdvisorSuggestion(
        num_objects=7,
        arrangement="dice_pattern",
        time_limit=3500,
        educational_tip="Look for groups of two!",
        encouragement="Super!",
    ))

    response = await build_subitizing_round(request(age=6), advisor, rng=random.Random(5))

    assert advisor.calls == 1
    assert response.correct_answer == 7
    assert [(t.x, t.y) for t in response.objects] == [(float(x), float(y)) for x, y in DICE_PATTERNS[7]]
    assert response.time_limit == 3500
    assert response.educational_tip == "Look for groups of two!"
    assert response.encouragement == "Super!"


async def test_advisor_failure_falls_back_to_default_round():
    advisor = StubAdvisor(error=ContentAdvisorError("boom"))

    response = await build_subitizing_round(request(age=6, question=2), advisor, rng=random.Random(8))

    assert advisor.calls == 1
    assert 1 <= response.correct_answer <= 10
    assert response.correct_answer == len(response.objects)
    assert response.time_limit == 4800
    assert response.educational_tip == DEFAULT_TIP


@pytest.mark.parametrize("content", [{"numObjects": 5}, 7, ["line"]])
async def test_non_text_advisor_content_falls_back(content):
    advisor = advisor_with(chat_response(content))

    response = await build_subitizing_round(request(age=6, question=2), advisor, rng=random.Random(8))

    assert response.correct_answer == len(response.objects)
    assert response.time_limit == 4800
    assert response.educational_tip == DEFAULT_TIP


async def test_invalid_age_is_not_hidden_by_fallback():
    advisor = StubAdvisor(error=ContentAdvisorError("boom"))

    with pytest.raises(DomainValidationError):
        await build_subitizing_round(request(age=30), advisor)
    assert advisor.calls == 0


def test_clamp_suggestion_keeps_round_in_band():
    bounds = DifficultyScheduler().bounds(6, 1)

    spec = clamp_suggestion(AdvisorSuggestion(num_objects=50, arrangement="triangle", time_limit=100), bounds)

    assert spec.count == 10
    assert spec.arrangement == Arrangement.RANDOM
    assert spec.time_limit_ms == 3000


def test_clamp_suggestion_uses_scheduler_time_when_missing():
    bounds = DifficultyScheduler().bounds(8, 4, previous_correct=False)

    spec = clamp_suggestion(AdvisorSuggestion(num_objects=1, arrangement="circle"), bounds)

    assert spec.count == bounds.min_objects
    assert spec.arrangement == Arrangement.CIRCLE
    assert spec.time_limit_ms == bounds.time_limit_ms


async def test_content_advisor_parses_fenced_json():
    content = "```json\n" + json.dumps({
        "numObjects": 6,
        "arrangement": "line",
        "timeLimit": 2500,
        "educationalTip": "Count in pairs",
        "encouragement": "Great job!",
    }) + "\n```"
    advisor = advisor_with(chat_response(content))

    suggestion = await advisor.suggest(request(), DifficultyScheduler().bounds(6, 1))

    assert suggestion.num_objects == 6
    assert suggestion.arrangement == "line"
    assert suggestion.time_limit == 2500


async def test_content_advisor_sends_bearer_token():
    seen = {}

    def handler(http_request):
        seen["auth"] = http_request.headers["Authorization"]
        seen["body"] = json.loads(http_request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": '{"numObjects": 5}'}}]})

    await advisor_with(handler).suggest(request(), DifficultyScheduler().bounds(6, 1))

    assert seen["auth"] == "Bearer test-key"
    assert seen["body"]["model"] == "test-model"


@pytest.mark.parametrize("handler", [
    chat_response("not json at all"),
    chat_response('{"arrangement": "line"}'),
    chat_response('{"numObjects": 0}'),
    chat_response('{"numObjects": 5}', status_code=500),
    chat_response({"numObjects": 5}),
    chat_response(7),
    chat_response(None),
    lambda r: httpx.Response(200, json={"unexpected": True}),
    lambda r: httpx.Response(200, text="<html>"),
])
async def test_content_advisor_errors_are_normalised(handler):
    with pytest.raises(ContentAdvisorError):
        await advisor_with(handler).suggest(request(), DifficultyScheduler().bounds(6, 1))


async def test_content_advisor_timeout():
    def handler(http_request):
        raise httpx.ConnectTimeout("timed out", request=http_request)

    with pytest.raises(ContentAdvisorError):
        await advisor_with(handler).suggest(request(), DifficultyScheduler().bounds(6, 1))


def test_extract_json_object():
    assert extract_json_object('Sure! {"numObjects": 3} Enjoy') == {"numObjects": 3}
    assert extract_json_object("```\n{\"a\": 1}\n```") == {"a": 1}
    assert extract_json_object("") is None
    assert extract_json_object("{broken") is None


def test_round_source_requires_plan():
    class Incomplete(RoundSource):
        pass

    with pytest.raises(TypeError):
        Incomplete(DifficultyScheduler())
