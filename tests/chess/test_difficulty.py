"""Unit tests for src/chess/difficulty.py"""

import pytest

from src.chess.difficulty import (
    DEFAULT_SKILL_LEVEL,
    SKILL_PRESETS,
    is_valid_skill_level,
    to_depth,
)
from src.core.exceptions import InvalidSkillLevelError


@pytest.mark.parametrize(
    "level, expected_depth",
    [
        (0, 1),
        (2, 1),
        (5, 1),
        (6, 2),
        (10, 2),
        (15, 2),
        (16, 3),
        (20, 3),
    ],
)
def test_skill_level_to_depth(level: int, expected_depth: int) -> None:
    assert to_depth(level) == expected_depth


@pytest.mark.parametrize("level", [-1, 21, 100])
def test_out_of_range_skill_level(level: int) -> None:
    assert not is_valid_skill_level(level)
    with pytest.raises(InvalidSkillLevelError):
        to_depth(level)


def test_presets() -> None:
    """easy, medium and hard map onto the three depths"""
    assert [to_depth(SKILL_PRESETS[name]) for name in ("easy", "medium", "hard")] == [1, 2, 3]
    assert is_valid_skill_level(DEFAULT_SKILL_LEVEL)
    assert to_depth(DEFAULT_SKILL_LEVEL) == 1


def test_depth_never_decreases_with_skill() -> None:
    depths = [to_depth(level) for level in range(0, 21)]
    assert depths == sorted(depths)
