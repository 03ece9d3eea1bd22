from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest

from findmygym.services.aggregates import (
    average_rating,
    category_ratings,
    get_distance_km,
    is_gym_open,
    lowest_price,
    rating_distribution,
)

pytestmark = pytest.mark.unit

# 2026-10-19 is a Monday, 2026-10-18 a Sunday
MONDAY = datetime(2026, 10, 19)
SUNDAY = datetime(2026, 10, 18)


def _hour(day: int, open_time: str = "06:00", close_time: str = "22:00", closed: bool = False):
    return SimpleNamespace(
        day_of_week=day, open_time=open_time, close_time=close_time, is_closed=closed
    )


def _week():
    return [_hour(0, "08:00", "18:00")] + [_hour(d) for d in range(1, 7)]


def _review(cleanliness=None, equipment=None, staff=None, value=None):
    return SimpleNamespace(
        cleanliness=cleanliness, equipment=equipment, staff=staff, value_for_money=value
    )


def test_average_rating_rounds_half_up():
    assert average_rating([4.0, 4.5]) == 4.3
    assert average_rating([3.0, 4.0, 5.0]) == 4.0


def test_average_rating_empty_is_zero():
    assert average_rating([]) == 0.0


def test_rating_distribution_buckets_by_floor():
    dist = rating_distribution([1.0, 2.5, 4.9, 5.0, 5.0])
    assert dist == [1, 1, 0, 1, 2]
    assert sum(dist) == 5


def test_rating_distribution_ignores_sub_one_ratings():
    assert rating_distribution([0.5]) == [0, 0, 0, 0, 0]


def test_category_ratings_only_counts_complete_reviews():
    reviews = [
        _review(4, 4, 4, 4),
        _review(2, 3, 4, 5),
        _review(5, None, 5, 5),
    ]
    cats = category_ratings(reviews)
    assert cats.cleanliness == 3.0
    assert cats.equipment == 3.5
    assert cats.staff == 4.0
    assert cats.value_for_money == 4.5


def test_category_ratings_without_complete_reviews_is_zero():
    cats = category_ratings([_review(4, None, None, None)])
    assert (cats.cleanliness, cats.equipment, cats.staff, cats.value_for_money) == (0, 0, 0, 0)


def test_lowest_price():
    assert lowest_price([1500.0, 200.0, 4000.0]) == 200.0
    assert lowest_price([]) is None


def test_distance_same_point_is_zero():
    assert get_distance_km(12.9716, 77.5946, 12.9716, 77.5946) == 0.0


def test_distance_mg_road_to_koramangala():
    d = get_distance_km(12.9716, 77.5946, 12.9352, 77.6245)
    assert 4.0 < d < 6.0
    assert d == round(d, 1)


def test_open_during_hours_reports_closing_time():
    status = is_gym_open(_week(), MONDAY.replace(hour=10))
    assert status.is_open is True
    assert status.closes_at == "22:00"
    assert status.opens_at is None


def test_closed_at_closing_minute():
    status = is_gym_open(_week(), MONDAY.replace(hour=22))
    assert status.is_open is False


def test_before_opening_reports_todays_open_time():
    status = is_gym_open(_week(), SUNDAY.replace(hour=7))
    assert status.is_open is False
    assert status.opens_at == "08:00"


def test_after_closing_reports_next_day_open_time():
    # Saturday night -> Sunday opens later than weekdays
    saturday_night = datetime(2026, 10, 24, 23, 0)
    status = is_gym_open(_week(), saturday_night)
    assert status.is_open is False
    assert status.opens_at == "08:00"


def test_skips_closed_days_when_looking_ahead():
    hours = [_hour(1), _hour(2, closed=True), _hour(3, "07:00", "21:00")]
    status = is_gym_open(hours, MONDAY.replace(hour=23))
    assert status.opens_at == "07:00"


def test_single_open_day_wraps_a_full_week():
    status = is_gym_open([_hour(1, "09:00", "17:00")], MONDAY.replace(hour=18))
    assert status.is_open is False
    assert status.opens_at == "09:00"


def test_no_hours_is_closed_without_next_opening():
    status = is_gym_open([], MONDAY.replace(hour=10))
    assert status.is_open is False
    assert status.opens_at is None
