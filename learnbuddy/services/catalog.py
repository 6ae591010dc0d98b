"""User profiles and the game catalog."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from learnbuddy.core.errors import NotFoundError
from learnbuddy.models.game import Game
from learnbuddy.models.user import User
from learnbuddy.schemas.catalog import UserCreateSchema


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc(), User.name))
    return list(result.scalars().all())


async def create_user(db: AsyncSession, data: UserCreateSchema) -> User:
    user = User(
        name=data.name.strip(),
        avatar=data.avatar,
        age=data.age,
        parent_email=data.parent_email,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def get_user(db: AsyncSession, user_id: str) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


async def list_games(db: AsyncSession, active_only: bool = False) -> list[Game]:
    stmt = select(Game)
    if active_only:
        stmt = stmt.where(Game.is_active.is_(True)).order_by(Game.difficulty, Game.title)
    else:
        stmt = stmt.order_by(Game.category, Game.title)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_game(db: AsyncSession, game_id: str) -> Game:
    result = await db.execute(
        select(Game).where(Game.id == game_id).execution_options(populate_existing=True)
    )
    game = result.scalar_one_or_none()
    if game is None:
        raise NotFoundError(f"Game {game_id} not found")
    return game
