"""Remote content advisor: asks a chat-completions API how the next round should look.

Every failure (network, timeout, HTTP status, malformed JSON, schema mismatch)
surfaces as ``ContentAdvisorError`` so round planning can fall back locally.
"""
import json
import logging

import httpx
from pydantic import ValidationError

from learnbuddy.core.config import Settings
from learnbuddy.core.errors import ContentAdvisorError
from learnbuddy.schemas.pattern import AdvisorSuggestion, Arrangement, PatternRequestSchema
from learnbuddy.services.difficulty import RoundBounds

logger = logging.getLogger(__name__)


def extract_json_object(text: str) -> dict | None:
    """Pull the first top-level JSON object out of model output (handles ```json fences)."""
    if not text:
        return None
    t = text.strip()
    if t.startswith("```"):
        parts = t.split("```")
        if len(parts) >= 2:
            t = parts[1]
            if t.startswith("json"):
                t = t[len("json"):]
            t = t.strip()
    start = t.find("{")
    end = t.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        data = json.loads(t[start:end + 1])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def build_prompt(request: PatternRequestSchema, bounds: RoundBounds) -> str:
    if request.previous_correct is None:
        previous = "first question"
    else:
        previous = "correct" if request.previous_correct else "incorrect"
    styles = " | ".join(f'"{a.value}"' for a in Arrangement)
    return (
        f"Create a subitizing exercise for a {request.user_age}-year-old child.\n"
        f"Difficulty: {request.difficulty}. Question number: {request.question_number}. "
        f"Previous answer: {previous}.\n"
        "Respond only with a JSON object:\n"
        f'{{"numObjects": {bounds.min_objects}-{bounds.max_objects}, "arrangement": {styles}, '
        f'"timeLimit": {bounds.min_time_ms}-{bounds.max_time_ms} (ms), '
        '"educationalTip": short tip, "encouragement": short encouraging message}'
    )


class ContentAdvisor:
    def __init__(
        self,
        api_key: str,
        api_url: str,
        model: str,
        timeout: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContentAdvisor | None":
        if not settings.deepseek_api_key:
            return None
        return cls(
            api_key=settings.deepseek_api_key,
            api_url=settings.deepseek_api_url,
            model=settings.deepseek_model,
            timeout=settings.content_advisor_timeout,
        )

    async def suggest(self, request: PatternRequestSchema, bounds: RoundBounds) -> AdvisorSuggestion:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": build_prompt(request, bounds)}],
            "temperature": 0.7,
            "max_tokens": 500,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as exc:
            raise ContentAdvisorError(f"content advisor request failed: {exc!r}") from exc
        except ValueError as exc:
            raise ContentAdvisorError("content advisor returned a non-JSON body") from exc

        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ContentAdvisorError("content advisor response has no message content") from exc
        if not isinstance(content, str):
            raise ContentAdvisorError(f"content advisor message content is {type(content).__name__}, not text")

        data = extract_json_object(content)
        if data is None:
            raise ContentAdvisorError("content advisor message is not a JSON object")
        try:
            suggestion = AdvisorSuggestion.model_validate(data)
        except ValidationError as exc:
            raise ContentAdvisorError(f"content advisor suggestion is invalid: {exc.error_count()} error(s)") from exc
        logger.debug("Advisor suggested %s", suggestion)
        return suggestion
