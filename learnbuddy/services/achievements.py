"""Achievement unlocks (idempotent per user/game/title) and the per-game trophy overview."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from learnbuddy.models.achievement import Achievement, AchievementTier
from learnbuddy.models.game import Game
from learnbuddy.models.progress import GameProgress
from learnbuddy.schemas.achievement import GameTierOverviewSchema
from learnbuddy.services.catalog import get_game, get_user
from learnbuddy.services.scoring import compute_achievements, tier_overview

logger = logging.getLogger(__name__)


async def find_achievement(db: AsyncSession, user_id: str, game_id: str | None, title: str) -> Achievement | None:
    stmt = select(Achievement).where(Achievement.user_id == user_id, Achievement.title == title)
    # NULL never equals NULL in SQL, so game-less achievements need IS NULL
    if game_id is None:
        stmt = stmt.where(Achievement.game_id.is_(None))
    else:
        stmt = stmt.where(Achievement.game_id == game_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def unlock_achievement(
    db: AsyncSession,
    user_id: str,
    title: str,
    description: str,
    icon: str,
    game_id: str | None = None,
    tier: AchievementTier | None = None,
) -> Achievement:
    """Create the achievement, or return the existing one for the same (user, game, title)."""
    existing = await find_achievement(db, user_id, game_id, title)
    if existing is not None:
        return existing

    await get_user(db, user_id)
    if game_id is not None:
        await get_game(db, game_id)

    achievement = Achievement(
        user_id=user_id,
        game_id=game_id,
        title=title,
        description=description,
        icon=icon,
        tier=tier,
    )
    db.add(achievement)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        existing = await find_achievement(db, user_id, game_id, title)
        if existing is None:
            raise
        return existing
    await db.refresh(achievement)
    logger.info("Achievement unlocked: user=%s game=%s title=%r", user_id, game_id, title)
    return achievement


async def unlock_earned_achievements(db: AsyncSession, progress: GameProgress) -> list[Achievement]:
    """Unlock every rule ``progress`` satisfies. Already-unlocked ones come back unchanged."""
    user_id, game_id = progress.user_id, progress.game_id
    earned = compute_achievements(progress)
    if not earned:
        return []
    game = await get_game(db, game_id)
    game_title = game.title
    return [
        await unlock_achievement(
            db,
            user_id,
            rule.title,
            rule.describe(game_title),
            rule.icon,
            game_id=game_id,
            tier=rule.tier,
        )
        for rule in earned
    ]


async def list_achievements(db: AsyncSession, user_id: str | None = None) -> list[Achievement]:
    stmt = select(Achievement).order_by(Achievement.user_id, Achievement.game_id, Achievement.unlocked_at.desc())
    if user_id is not None:
        stmt = stmt.where(Achievement.user_id == user_id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def achievement_overview(db: AsyncSession, user_id: str) -> list[GameTierOverviewSchema]:
    """Trophy status per game the user has points in."""
    await get_user(db, user_id)
    rows = await db.execute(
        select(Game, GameProgress.total_score)
        .join(GameProgress, GameProgress.game_id == Game.id)
        .where(GameProgress.user_id == user_id, GameProgress.total_score > 0)
        .order_by(Game.title)
    )
    tier_rows = await db.execute(
        select(Achievement.game_id, Achievement.tier)
        .where(Achievement.user_id == user_id, Achievement.tier.is_not(None))
    )
    tiers_by_game: dict[str, set[AchievementTier]] = {}
    for game_id, tier in tier_rows.all():
        tiers_by_game.setdefault(game_id, set()).add(tier)

    return [
        GameTierOverviewSchema(
            game_id=game.id,
            title=game.title,
            icon=game.icon,
            total_score=total_score,
            tiers=tier_overview(total_score, tiers_by_game.get(game.id, set())),
        )
        for game, total_score in rows.all()
    ]
