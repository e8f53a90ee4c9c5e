"""Translate the 0-20 skill scale of UCI engines into a search depth for the built-in engine"""

from src.core.config import MAX_SKILL_LEVEL, MIN_SKILL_LEVEL
from src.core.exceptions import InvalidSkillLevelError

DEFAULT_SKILL_LEVEL = 5

# Presets offered to the player
SKILL_PRESETS: dict[str, int] = {
    "easy": 2,
    "medium": 10,
    "hard": 20,
}

# (highest level in tier, depth). Deliberately coarse: three tiers, not a linear scale.
DEPTH_TIERS: list[tuple[int, int]] = [
    (5, 1),
    (15, 2),
    (MAX_SKILL_LEVEL, 3),
]


def is_valid_skill_level(level: int) -> bool:
    return MIN_SKILL_LEVEL <= level <= MAX_SKILL_LEVEL


def to_depth(level: int) -> int:
    """0-5 -> depth 1, 6-15 -> depth 2, 16-20 -> depth 3"""
    if not is_valid_skill_level(level):
        raise InvalidSkillLevelError(
            f"Skill level must be between {MIN_SKILL_LEVEL} and {MAX_SKILL_LEVEL}, got {level}"
        )
    return next(depth for highest_level, depth in DEPTH_TIERS if level <= highest_level)
