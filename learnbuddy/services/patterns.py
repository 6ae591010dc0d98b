"""Layout generation for subitizing rounds.

Every style places ``spec.count`` tokens on a 0-100 canvas, except the random
layout, which may place fewer when it runs out of free grid cells. The answer
key is always the number of tokens actually placed.
"""
import math
import random
from dataclasses import dataclass

from learnbuddy.schemas.pattern import Arrangement, RoundSpec, VisualToken

SHAPES = ("circle", "square", "triangle", "star", "heart")
COLORS = ("#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7", "#DDA0DD", "#98D8C8")
SIZES = ("small", "medium", "large")

# Line: horizontal band from x=20 to x=80, +/-5 vertical jitter around y=50
LINE_START_X = 20
LINE_SPAN_X = 60
LINE_Y = 50
LINE_JITTER = 10

CIRCLE_CENTER = (50, 50)
CIRCLE_RADIUS = 25

# Random: 8 x 6 coarse grid, cell (c, r) -> (c*10 + [0,5), r*10 + [0,5))
GRID_COLUMNS = 8
GRID_ROWS = 6
GRID_CELL = 10
GRID_JITTER = 5
MAX_PLACEMENT_ATTEMPTS = 20

# Dice/domino pip layouts
DICE_PATTERNS: dict[int, tuple[tuple[int, int], ...]] = {
    1: ((50, 50),),
    2: ((30, 30), (70, 70)),
    3: ((30, 30), (50, 50), (70, 70)),
    4: ((30, 30), (70, 30), (30, 70), (70, 70)),
    5: ((30, 30), (70, 30), (50, 50), (30, 70), (70, 70)),
    6: ((30, 25), (70, 25), (30, 50), (70, 50), (30, 75), (70, 75)),
    7: ((20, 20), (50, 20), (80, 20), (35, 50), (65, 50), (20, 80), (80, 80)),
    8: ((25, 20), (50, 20), (75, 20), (25, 50), (75, 50), (25, 80), (50, 80), (75, 80)),
    9: ((20, 15), (50, 15), (80, 15), (20, 45), (50, 45), (80, 45), (20, 75), (50, 75), (80, 75)),
    10: ((15, 15), (35, 15), (55, 15), (75, 15), (25, 40), (65, 40), (15, 65), (35, 65), (55, 65), (75, 65)),
}
MAX_DICE_COUNT = max(DICE_PATTERNS)


@dataclass(frozen=True)
class GeneratedPattern:
    tokens: tuple[VisualToken, ...]
    correct_answer: int

    @property
    def difficulty(self) -> int:
        """Rough difficulty reported to the client: one level per two tokens."""
        return math.ceil(len(self.tokens) / 2)


def _token(x: float, y: float, rng: random.Random) -> VisualToken:
    return VisualToken(
        x=x,
        y=y,
        color=rng.choice(COLORS),
        shape=rng.choice(SHAPES),
        size=rng.choice(SIZES),
    )


def grid_cell(token: VisualToken) -> tuple[int, int]:
    """Grid cell a randomly placed token was drawn from."""
    return int(token.x // GRID_CELL), int(token.y // GRID_CELL)


def line_layout(count: int, rng: random.Random) -> list[VisualToken]:
    step = LINE_SPAN_X / max(1, count - 1)
    return [
        _token(LINE_START_X + i * step, LINE_Y + (rng.random() - 0.5) * LINE_JITTER, rng)
        for i in range(count)
    ]


def circle_layout(count: int, rng: random.Random) -> list[VisualToken]:
    cx, cy = CIRCLE_CENTER
    tokens = []
    for i in range(count):
        angle = i * 2 * math.pi / count
        tokens.append(_token(cx + CIRCLE_RADIUS * math.cos(angle), cy + CIRCLE_RADIUS * math.sin(angle), rng))
    return tokens


def dice_layout(count: int, rng: random.Random) -> list[VisualToken]:
    template = DICE_PATTERNS.get(count)
    if template is None:
        return random_layout(count, rng)
    return [_token(x, y, rng) for x, y in template]


def random_layout(count: int, rng: random.Random) -> list[VisualToken]:
    used: set[tuple[int, int]] = set()
    tokens = []
    for _ in range(count):
        for _attempt in range(MAX_PLACEMENT_ATTEMPTS):
            cell = (rng.randint(1, GRID_COLUMNS), rng.randint(1, GRID_ROWS))
            if cell not in used:
                break
        else:
            # Grid too crowded: drop this token rather than loop forever
            continue
        used.add(cell)
        col, row = cell
        tokens.append(
            _token(col * GRID_CELL + rng.random() * GRID_JITTER, row * GRID_CELL + rng.random() * GRID_JITTER, rng)
        )
    return tokens


LAYOUTS = {
    Arrangement.LINE: line_layout,
    Arrangement.CIRCLE: circle_layout,
    Arrangement.DICE_PATTERN: dice_layout,
    Arrangement.RANDOM: random_layout,
}


def generate_pattern(spec: RoundSpec, rng: random.Random | None = None) -> GeneratedPattern:
    """Lay out ``spec.count`` tokens in ``spec.arrangement`` and return them with the answer key."""
    rng = rng or random.Random()
    layout = LAYOUTS.get(spec.arrangement, random_layout)
    tokens = tuple(layout(spec.count, rng))
    return GeneratedPattern(tokens=tokens, correct_answer=len(tokens))
