from datetime import date, datetime, timedelta

import pytest

from scheduling import (
    format_minutes, get_current_program_day, get_current_week_number, get_current_workout_time,
    get_daily_targets_from_schedule, get_deload_factor, get_meal_times, get_today_photo_angle,
    get_today_workout, get_week_schedule, is_deload_week, is_rest_day, is_weekend,
    parse_clock, parse_date,
)

START = date(2024, 1, 1)  # Monday


def test_parse_date_accepts_strings_and_dates():
    assert parse_date("2024-03-05") == date(2024, 3, 5)
    assert parse_date(START) == START
    assert parse_date(datetime(2024, 1, 1, 23, 30)) == START
    with pytest.raises(ValueError):
        parse_date("03/05/2024")
    with pytest.raises(ValueError):
        parse_date(None)


def test_parse_clock():
    assert parse_clock("06:00") == 360
    assert parse_clock("7:05") == 425
    for bad in ("25:00", "12:60", "noon", ""):
        with pytest.raises(ValueError):
            parse_clock(bad)


def test_format_minutes_wraps_past_midnight():
    assert format_minutes(375) == "06:15"
    assert format_minutes(1470) == "00:30"


def test_program_day_cycles_weekly():
    assert get_current_program_day(START, START) == 1
    assert get_current_program_day(START, START + timedelta(days=6)) == 7
    assert get_current_program_day(START, START + timedelta(days=7)) == 1
    assert get_current_program_day("2024-01-01", "2024-01-10") == 3


def test_rest_day_is_day_seven():
    assert is_rest_day(START, START + timedelta(days=6))
    assert not is_rest_day(START, START)
    assert get_today_workout(START, START + timedelta(days=6))["exercises"] == []


def test_week_schedule_starts_today_and_wraps():
    schedule = get_week_schedule(START, START + timedelta(days=5))
    assert [entry["program_day"] for entry in schedule] == [6, 7, 1, 2, 3, 4, 5]
    assert schedule[0]["is_today"] is True
    assert schedule[0]["date"] == "2024-01-06"
    assert schedule[0]["day_name"] == "Sat"
    assert schedule[1]["workout"]["name"] == "Rest"


def test_weekend_and_workout_time():
    assert is_weekend(date(2024, 1, 6))
    assert is_weekend(date(2024, 1, 7))
    assert not is_weekend(date(2024, 1, 5))
    assert get_current_workout_time("07:00", "09:00", date(2024, 1, 6)) == "09:00"
    assert get_current_workout_time("07:00", "09:00", date(2024, 1, 5)) == "07:00"


def test_every_fourth_week_is_deload():
    assert get_current_week_number(START, START) == 1
    assert not is_deload_week(START, START + timedelta(days=20))
    assert is_deload_week(START, START + timedelta(days=21))
    assert get_deload_factor(START, START + timedelta(days=27)) == 0.6
    assert get_deload_factor(START, START + timedelta(days=28)) == 1.0


def test_photo_angle_rotates():
    angles = [get_today_photo_angle(START, START + timedelta(days=i)) for i in range(4)]
    assert angles == ["front", "side", "back", "front"]


def test_meal_times_without_workout_use_template_clock():
    meals = get_meal_times("06:00")
    assert [m["scheduled_time"] for m in meals] == ["06:15", "08:30", "11:30", "14:30", "17:30", "20:00"]
    assert meals[0]["name"] == "Pre-Workout Breakfast"


def test_meal_times_early_workout_merges_breakfast():
    meals = get_meal_times("06:00", "bulk", "07:00")
    assert [m["scheduled_time"] for m in meals] == ["06:15", "08:30", "11:30", "14:30", "17:30", "20:00"]


def test_meal_times_late_workout_has_separate_breakfast():
    meals = get_meal_times("06:00", "bulk", "09:00", is_weekend_day=True)
    assert [m["scheduled_time"] for m in meals] == ["06:30", "07:45", "10:30", "13:30", "16:30", "19:30"]
    assert [m["meal_number"] for m in meals] == [1, 2, 3, 4, 5, 6]


def test_meal_times_past_midnight_keep_day_order():
    meals = get_meal_times("10:00", None, "20:00")
    assert [m["scheduled_time"] for m in meals] == ["10:30", "18:45", "21:30", "00:30", "03:30", "06:30"]
    offsets = [m["day_minutes"] for m in meals]
    assert offsets == sorted(offsets)
    assert [m["next_day"] for m in meals] == [False, False, False, True, True, True]


def test_meal_times_keep_template_macros():
    meals = get_meal_times("06:00", "bulk", "09:00", is_weekend_day=True)
    totals = get_daily_targets_from_schedule(True)
    assert sum(m["macros"]["calories"] for m in meals) == totals["calories"]
    assert sum(m["macros"]["protein"] for m in meals) == totals["protein"]
    assert all(m["foods"] for m in meals)
