"""Round generation API for the subitizing game."""
from typing import Annotated

from fastapi import APIRouter, Depends

from learnbuddy.core.config import get_settings
from learnbuddy.schemas.pattern import PatternRequestSchema, PatternResponseSchema
from learnbuddy.services.content_advisor import ContentAdvisor
from learnbuddy.services.subitizing import build_subitizing_round

router = APIRouter(prefix="/api/ai", tags=["rounds"])


def get_content_advisor() -> ContentAdvisor | None:
    """Remote advisor when an API key is configured; None means local rounds only."""
    return ContentAdvisor.from_settings(get_settings())


@router.post("/generate-subitizing", response_model=PatternResponseSchema)
async def generate_subitizing(
    body: PatternRequestSchema,
    advisor: Annotated[ContentAdvisor | None, Depends(get_content_advisor)],
):
    """Plan and lay out one subitizing round. Falls back to a local round if the advisor fails."""
    return await build_subitizing_round(body, advisor)
