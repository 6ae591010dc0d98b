import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from learnbuddy.db.base import Base
from learnbuddy.db.session import get_db
from learnbuddy.main import app
from learnbuddy.models import Game, ScoringMode, User
from learnbuddy.routers.patterns import get_content_advisor


@pytest.fixture
async def engine(tmp_path):
    # File-based sqlite so every session sees the same data.
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'learnbuddy-test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def user(db_session):
    user = User(name="Mia", age=6)
    db_session.add(user)
    await db_session.commit()
    return user


async def _add_game(db_session, title, scoring_mode):
    game = Game(
        title=title,
        description=f"{title} test game",
        icon="🎲",
        category="numbers",
        difficulty=1,
        is_active=True,
        scoring_mode=scoring_mode,
    )
    db_session.add(game)
    await db_session.commit()
    return game


@pytest.fixture
async def round_game(db_session):
    return await _add_game(db_session, "True or False", ScoringMode.ROUND)


@pytest.fixture
async def incremental_game(db_session):
    return await _add_game(db_session, "Subitizing", ScoringMode.INCREMENTAL)


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_content_advisor] = lambda: None
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.clear()
