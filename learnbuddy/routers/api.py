"""API routes: JSON for users, games, progress and achievements."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from learnbuddy.db.session import get_db
from learnbuddy.models.progress import GameProgress
from learnbuddy.schemas.achievement import (
    AchievementCreateSchema,
    AchievementOutSchema,
    GameTierOverviewSchema,
)
from learnbuddy.schemas.catalog import GameOutSchema, UserCreateSchema, UserOutSchema
from learnbuddy.schemas.progress import (
    ProgressOutSchema,
    ProgressUpdateOutSchema,
    ProgressUpdateSchema,
    TotalOutSchema,
    TotalUpdateSchema,
)
from learnbuddy.services import achievements, catalog, progress as progress_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


async def _unlock_best_effort(db: AsyncSession, progress: GameProgress) -> list[AchievementOutSchema]:
    """Achievement writes never block gameplay: failures are logged and dropped."""
    user_id, game_id = progress.user_id, progress.game_id
    try:
        unlocked = await achievements.unlock_earned_achievements(db, progress)
        return [AchievementOutSchema.model_validate(a) for a in unlocked]
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Achievement check failed for user=%s game=%s", user_id, game_id)
        return []


# ---------- users & games ----------

@router.get("/users", response_model=list[UserOutSchema])
async def get_users(db: Annotated[AsyncSession, Depends(get_db)]):
    return await catalog.list_users(db)


@router.post("/users", response_model=UserOutSchema, status_code=201)
async def create_user(body: UserCreateSchema, db: Annotated[AsyncSession, Depends(get_db)]):
    return await catalog.create_user(db, body)


@router.get("/games", response_model=list[GameOutSchema])
async def get_games(
    db: Annotated[AsyncSession, Depends(get_db)],
    active_only: Annotated[bool, Query(alias="activeOnly")] = False,
):
    return await catalog.list_games(db, active_only=active_only)


# ---------- progress ----------

@router.post("/game-progress", response_model=ProgressUpdateOutSchema)
async def save_progress(
    body: ProgressUpdateSchema,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record a completed round; 201 on the first round for this user and game."""
    result = await progress_service.record_round(db, body.user_id, body.game_id, body.score, body.level)
    out = ProgressUpdateOutSchema.model_validate(result.progress)
    out.achievements = await _unlock_best_effort(db, result.progress)
    if result.created:
        response.status_code = 201
    return out


@router.get("/game-progress", response_model=ProgressOutSchema | list[ProgressOutSchema])
async def get_progress(
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: Annotated[str | None, Query(alias="userId")] = None,
    game_id: Annotated[str | None, Query(alias="gameId")] = None,
):
    """One record (userId + gameId), a user's records (userId) or everything (no filters)."""
    if game_id is not None and user_id is None:
        raise HTTPException(status_code=400, detail="userId is required when gameId is given")
    if user_id is not None and game_id is not None:
        progress = await progress_service.get_progress(db, user_id, game_id)
        if progress is None:
            raise HTTPException(status_code=404, detail="Progress not found")
        return progress
    return await progress_service.list_progress(db, user_id=user_id)


@router.post("/game-progress/update-total", response_model=TotalOutSchema)
async def update_total(body: TotalUpdateSchema, db: Annotated[AsyncSession, Depends(get_db)]):
    """Add live points to the lifetime total (incremental games only)."""
    progress = await progress_service.add_to_total(db, body.user_id, body.game_id, body.points_to_add)
    out = TotalOutSchema(total_score=progress.total_score)
    await _unlock_best_effort(db, progress)
    return out


# ---------- achievements ----------

@router.get("/achievements", response_model=list[AchievementOutSchema])
async def get_achievements(
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: Annotated[str | None, Query(alias="userId")] = None,
):
    return await achievements.list_achievements(db, user_id=user_id)


@router.post("/achievements", response_model=AchievementOutSchema)
async def unlock(body: AchievementCreateSchema, db: Annotated[AsyncSession, Depends(get_db)]):
    """Unlock an achievement; repeating the same (user, game, title) returns the original."""
    return await achievements.unlock_achievement(
        db,
        body.user_id,
        body.title,
        body.description,
        body.icon,
        game_id=body.game_id,
        tier=body.tier,
    )


@router.get("/achievements/overview", response_model=list[GameTierOverviewSchema])
async def get_overview(
    user_id: Annotated[str, Query(alias="userId")],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await achievements.achievement_overview(db, user_id)
