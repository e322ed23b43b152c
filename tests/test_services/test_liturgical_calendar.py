"""Tests for the liturgical rotation table and scripture fallback policy."""

from datetime import date, timedelta

import pytest

from linen.services.liturgical_calendar import (
    DAILY_SCRIPTURES,
    FALLBACK_SCRIPTURE,
    LITURGICAL_THEMES,
    find_scripture,
    plan_rotation,
    scripture_for,
    season_keys,
)


def test_rotation_has_fifty_two_weeks():
    assert len(LITURGICAL_THEMES) == 52


def test_season_keys_count_within_season():
    keys = season_keys()
    assert keys[0] == "Advent-1"
    assert keys[1] == "Advent-2"
    assert len(keys) == len(set(keys))


def test_known_key_resolves_exact_scripture():
    day = scripture_for("Advent-1", 0)
    assert not day.is_fallback
    assert day.scripture.reference == "Isaiah 2:1-5"
    assert day.day_title == "Sunday"


@pytest.mark.parametrize(
    "key,day",
    [("Advent-7", 0), ("Lent-3", 4), ("Ordinary Time-1", 6), ("", 2)],
)
def test_missing_key_falls_back(key, day):
    resolved = scripture_for(key, day)
    assert resolved.is_fallback
    assert resolved.scripture == FALLBACK_SCRIPTURE
    assert find_scripture(key, day) is None


def test_every_rotation_day_resolves_without_error():
    for key in season_keys():
        for day in range(7):
            resolved = scripture_for(key, day)
            assert resolved.scripture.reference
            assert resolved.is_fallback == (key not in DAILY_SCRIPTURES)


@pytest.mark.parametrize("day", [-1, 7])
def test_day_outside_week_is_rejected(day):
    with pytest.raises(ValueError):
        scripture_for("Advent-1", day)


def test_fallback_verse_text():
    assert FALLBACK_SCRIPTURE.reference == "Psalm 46:10"
    assert FALLBACK_SCRIPTURE.text == "Be still, and know that I am God."


def test_plan_rotation_spaces_weeks_seven_days_apart():
    start = date(2025, 11, 30)
    weeks = list(plan_rotation(start))

    assert len(weeks) == 52
    assert [w.week_start for w in weeks] == [
        start + timedelta(days=7 * i) for i in range(52)
    ]
    assert all(len(w.days) == 7 for w in weeks)
    assert weeks[0].season_key == "Advent-1"
    assert not any(d.is_fallback for d in weeks[0].days)
    assert all(d.is_fallback for d in weeks[1].days)
