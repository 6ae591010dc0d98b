"""Per-game progress updates.

Counters are changed with single UPDATE statements (``total_score = total_score
+ :points``) instead of read-modify-write, so two rounds finishing at once for
the same (user, game) cannot lose an update. The first completion inserts the
row; if a concurrent request wins that insert, the update is re-applied.

Which path feeds ``total_score`` depends on the game's ``scoring_mode``:

* ``round``: ``record_round`` adds the round score; ``add_to_total`` is refused.
* ``incremental``: ``add_to_total`` adds points live; ``record_round`` still
  records score/best/plays but leaves the total alone.
"""
import logging
from dataclasses import dataclass

from sqlalchemy import case, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from learnbuddy.core.errors import DomainValidationError, ScoringModeConflict
from learnbuddy.models.game import ScoringMode
from learnbuddy.models.progress import GameProgress
from learnbuddy.services.catalog import get_game, get_user

logger = logging.getLogger(__name__)


@dataclass
class RoundResult:
    progress: GameProgress
    created: bool


def _match(user_id: str, game_id: str):
    return (GameProgress.user_id == user_id, GameProgress.game_id == game_id)


async def get_progress(db: AsyncSession, user_id: str, game_id: str) -> GameProgress | None:
    result = await db.execute(
        select(GameProgress).where(*_match(user_id, game_id)).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_progress(db: AsyncSession, user_id: str | None = None) -> list[GameProgress]:
    stmt = select(GameProgress).order_by(GameProgress.last_played_at.desc())
    if user_id is not None:
        stmt = stmt.where(GameProgress.user_id == user_id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def _apply_update(db: AsyncSession, user_id: str, game_id: str, values: dict) -> bool:
    result = await db.execute(
        update(GameProgress)
        .where(*_match(user_id, game_id))
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0


async def _insert(db: AsyncSession, progress: GameProgress) -> bool:
    """Insert a fresh record; False if another request created it first."""
    db.add(progress)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        logger.info("Progress for user=%s game=%s created concurrently", progress.user_id, progress.game_id)
        return False
    return True


async def record_round(
    db: AsyncSession,
    user_id: str,
    game_id: str,
    points: int,
    level: int | None = None,
) -> RoundResult:
    """Apply one completed round's score to the (user, game) record."""
    if points < 0:
        raise DomainValidationError("score must be >= 0")
    if level is not None and level < 1:
        raise DomainValidationError("level must be >= 1")
    await get_user(db, user_id)
    game = await get_game(db, game_id)
    counts_total = game.scoring_mode == ScoringMode.ROUND

    values = {
        "score": points,
        "best_score": case((GameProgress.best_score < points, points), else_=GameProgress.best_score),
        "times_played": GameProgress.times_played + 1,
        "last_played_at": func.now(),
    }
    if counts_total:
        values["total_score"] = GameProgress.total_score + points
    if level is not None:
        values["level"] = level

    created = False
    if not await _apply_update(db, user_id, game_id, values):
        created = await _insert(
            db,
            GameProgress(
                user_id=user_id,
                game_id=game_id,
                level=level or 1,
                score=points,
                best_score=points,
                total_score=points if counts_total else 0,
                times_played=1,
            ),
        )
        if not created:
            await _apply_update(db, user_id, game_id, values)
    await db.commit()

    progress = await get_progress(db, user_id, game_id)
    logger.info(
        "Round recorded: user=%s game=%s score=%d best=%d total=%d plays=%d",
        user_id, game_id, progress.score, progress.best_score, progress.total_score, progress.times_played,
    )
    return RoundResult(progress=progress, created=created)


async def add_to_total(db: AsyncSession, user_id: str, game_id: str, points_to_add: int) -> GameProgress:
    """Add live points to total_score only (incremental games)."""
    if points_to_add < 0:
        raise DomainValidationError("pointsToAdd must be >= 0")
    await get_user(db, user_id)
    game = await get_game(db, game_id)
    if game.scoring_mode != ScoringMode.INCREMENTAL:
        raise ScoringModeConflict(
            f"{game.title} records its total when the round ends; live increments would double-count"
        )

    values = {
        "total_score": GameProgress.total_score + points_to_add,
        "last_played_at": func.now(),
    }
    if not await _apply_update(db, user_id, game_id, values):
        created = await _insert(
            db,
            GameProgress(
                user_id=user_id,
                game_id=game_id,
                level=1,
                score=0,
                best_score=0,
                total_score=points_to_add,
                times_played=0,
            ),
        )
        if not created:
            await _apply_update(db, user_id, game_id, values)
    await db.commit()
    return await get_progress(db, user_id, game_id)
