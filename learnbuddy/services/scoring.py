"""Achievement rules and tier status computed from a progress record."""
from dataclasses import dataclass

from learnbuddy.models.achievement import AchievementTier
from learnbuddy.schemas.achievement import TierStatusSchema

# Lifetime points needed per trophy tier
TIER_THRESHOLDS = {
    AchievementTier.BRONZE: 10,
    AchievementTier.SILVER: 50,
    AchievementTier.GOLD: 100,
}

HIGH_SCORE = 8
PERFECT_SCORE = 10


@dataclass(frozen=True)
class AchievementRule:
    title: str
    description: str  # formatted with {game}
    icon: str
    metric: str  # progress attribute compared against threshold
    threshold: int
    tier: AchievementTier | None = None

    def is_earned(self, progress) -> bool:
        return (getattr(progress, self.metric, 0) or 0) >= self.threshold

    def describe(self, game_title: str) -> str:
        return self.description.format(game=game_title, threshold=self.threshold)


ACHIEVEMENT_RULES = [
    AchievementRule("Bronze Achievement", "Scored {threshold} points in {game}!", "🥉",
                    "total_score", TIER_THRESHOLDS[AchievementTier.BRONZE], AchievementTier.BRONZE),
    AchievementRule("Silver Achievement", "Scored {threshold} points in {game}!", "🥈",
                    "total_score", TIER_THRESHOLDS[AchievementTier.SILVER], AchievementTier.SILVER),
    AchievementRule("Gold Achievement", "Scored {threshold} points in {game}!", "🥇",
                    "total_score", TIER_THRESHOLDS[AchievementTier.GOLD], AchievementTier.GOLD),
    AchievementRule("First Game", "Completed your first {game} game!", "🎮", "times_played", 1),
    AchievementRule("High Scorer", "Scored {threshold} or more points in a single {game} game!", "🧠",
                    "best_score", HIGH_SCORE),
    AchievementRule("Perfect Game", "Got every question right in a {game} game!", "💎",
                    "best_score", PERFECT_SCORE),
]


def compute_achievements(progress, rules: list[AchievementRule] = ACHIEVEMENT_RULES) -> list[AchievementRule]:
    """Return the rules whose threshold ``progress`` has reached."""
    return [rule for rule in rules if rule.is_earned(progress)]


def tier_overview(total_score: int, unlocked_tiers: set[AchievementTier]) -> list[TierStatusSchema]:
    """Bronze/silver/gold status: unlocked if a tier record exists or the total already qualifies."""
    return [
        TierStatusSchema(
            tier=tier,
            threshold=threshold,
            unlocked=tier in unlocked_tiers or total_score >= threshold,
        )
        for tier, threshold in TIER_THRESHOLDS.items()
    ]
