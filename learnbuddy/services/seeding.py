"""Seed the mini-game catalog on first start."""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from learnbuddy.models.game import Game, ScoringMode

logger = logging.getLogger(__name__)

# Games that award a point per correct answer live use INCREMENTAL totals;
# the rest report one score when the round ends.
INITIAL_GAMES = [
    {
        "title": "Memory Match",
        "description": "Match colorful cards and improve your memory skills!",
        "icon": "🧠",
        "category": "memory",
        "difficulty": 1,
        "scoring_mode": ScoringMode.INCREMENTAL,
    },
    {
        "title": "Number Fun",
        "description": "Learn counting and basic math with fun animations!",
        "icon": "🔢",
        "category": "numbers",
        "difficulty": 1,
        "scoring_mode": ScoringMode.INCREMENTAL,
    },
    {
        "title": "Shapes",
        "description": "Tap shapes to hear their names with friendly audio.",
        "icon": "🔷",
        "category": "shapes",
        "difficulty": 1,
        "scoring_mode": ScoringMode.ROUND,
    },
    {
        "title": "Subitizing",
        "description": "Quickly recognize quantities without counting - perfect for developing number sense",
        "icon": "👁️",
        "category": "numbers",
        "difficulty": 2,
        "scoring_mode": ScoringMode.INCREMENTAL,
    },
    {
        "title": "Music Maker",
        "description": "Create music and learn about sounds and rhythms!",
        "icon": "🎵",
        "category": "music",
        "difficulty": 2,
        "scoring_mode": ScoringMode.ROUND,
    },
    {
        "title": "True or False",
        "description": "Look at pictures and decide if the statement is true or false!",
        "icon": "✅",
        "category": "learning",
        "difficulty": 1,
        "scoring_mode": ScoringMode.ROUND,
    },
    {
        "title": "Puzzle",
        "description": "Drag-and-drop jigsaw puzzles with fun images!",
        "icon": "🧩",
        "category": "logic",
        "difficulty": 2,
        "scoring_mode": ScoringMode.INCREMENTAL,
    },
]


async def seed_games(db: AsyncSession) -> int:
    """Insert the catalog if no games exist yet. Returns the number of games added."""
    result = await db.execute(select(func.count(Game.id)))
    if result.scalar_one() > 0:
        return 0
    for data in INITIAL_GAMES:
        db.add(Game(is_active=True, **data))
    await db.commit()
    logger.info("Seeded %d games", len(INITIAL_GAMES))
    return len(INITIAL_GAMES)
