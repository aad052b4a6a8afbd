"""Tests for growth points, levels and seasonal tips."""

from datetime import date

import pytest

from plant_tracker.modules.garden.domain.models.garden import UserProfile
from plant_tracker.modules.garden.domain.services.gamification_engine import (
    LEVEL_TITLES,
    GamificationEngine,
    RewardAction,
)
from plant_tracker.modules.garden.domain.services.seasons import season_for, seasonal_tip


@pytest.mark.parametrize(
    "points, level",
    [
        (0, 1),
        (99, 1),
        (100, 2),
        (199, 2),
        (200, 3),
        (1250, 13),
    ],
)
def test_level_for_points(points: int, level: int) -> None:
    assert GamificationEngine.level_for(points) == level


def test_add_points_crosses_level_boundary() -> None:
    profile = UserProfile(name="ana", growth_points=95, level=1)

    updated = GamificationEngine.add_points(profile, 10)

    assert updated.growth_points == 105
    assert updated.level == 2
    assert profile.growth_points == 95


def test_negative_points_rejected() -> None:
    with pytest.raises(ValueError):
        GamificationEngine.add_points(UserProfile(name="ana"), -5)


@pytest.mark.parametrize(
    "action, points",
    [
        (RewardAction.COMPLETE_TASK, 10),
        (RewardAction.ADD_PLANT, 50),
        (RewardAction.ADD_HISTORY, 15),
        (RewardAction.ACTIVATE_PLAN, 25),
    ],
)
def test_award_uses_points_table(action: RewardAction, points: int) -> None:
    assert GamificationEngine.award(UserProfile(name="ana"), action).growth_points == points


def test_level_title_is_clamped() -> None:
    assert GamificationEngine.level_title(1) == LEVEL_TITLES[0]
    assert GamificationEngine.level_title(0) == LEVEL_TITLES[0]
    assert GamificationEngine.level_title(50) == LEVEL_TITLES[-1]


def test_level_progress() -> None:
    assert GamificationEngine.level_progress(UserProfile(name="ana", growth_points=150, level=2)) == 50.0
    assert GamificationEngine.level_progress(UserProfile(name="ana")) == 0.0


# ============================================================================
# Seasons
# ============================================================================


@pytest.mark.parametrize(
    "month, season",
    [
        (1, "summer"),
        (3, "autumn"),
        (6, "winter"),
        (9, "spring"),
        (11, "spring"),
        (12, "summer"),
    ],
)
def test_season_for_month(month: int, season: str) -> None:
    assert season_for(date(2024, month, 10)) == season


def test_seasonal_tip_matches_season() -> None:
    tip = seasonal_tip(date(2024, 7, 1))
    assert tip.season == "winter"
    assert "dormant" in tip.tip
