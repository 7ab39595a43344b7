from datetime import date, timedelta

from analytics import (
    calculate_goal_date, calculate_nutrition_compliance, calculate_strength_change,
    calculate_weight_trend, calculate_workout_streak, measurement_changes,
    summarize_nutrition_history, weekly_volume_totals,
)

TODAY = date(2024, 1, 10)  # Wednesday


def weights(*values):
    return [{"date": (TODAY - timedelta(days=i)).isoformat(), "weight": w} for i, w in enumerate(values)]


def test_weight_trend_needs_two_weeks():
    trend = calculate_weight_trend(weights(186, 185, 184))
    assert trend == {"weekly_change": 0, "trend": "stable", "seven_day_avg": 185}


def test_weight_trend_empty_history():
    assert calculate_weight_trend([]) == {"weekly_change": 0, "trend": "stable", "seven_day_avg": 0}


def test_weight_trend_up_and_down():
    up = calculate_weight_trend(weights(*([186] * 7 + [185] * 7)))
    assert up == {"weekly_change": 1.0, "trend": "up", "seven_day_avg": 186}

    down = calculate_weight_trend(weights(*([184] * 7 + [185] * 7)))
    assert down["weekly_change"] == -1.0
    assert down["trend"] == "down"


def test_weight_trend_small_change_is_stable():
    trend = calculate_weight_trend(weights(*([185.2] * 7 + [185] * 7)))
    assert trend["weekly_change"] == 0.2
    assert trend["trend"] == "stable"


def test_goal_date_cut():
    goal = calculate_goal_date(190, 178, -1.2, TODAY)
    assert goal == {"date": TODAY + timedelta(days=70), "weeks_remaining": 10}


def test_goal_date_already_reached_or_no_rate():
    assert calculate_goal_date(177, 178, -1, TODAY) == {"date": TODAY, "weeks_remaining": 0}
    assert calculate_goal_date(195, 192, 0.5, TODAY) == {"date": TODAY, "weeks_remaining": 0}
    assert calculate_goal_date(190, 178, 0, TODAY) is None


def test_nutrition_compliance_caps_each_macro():
    target = {"calories": 2900, "protein": 185}
    assert calculate_nutrition_compliance({"calories": 2900, "protein": 185}, target) == 100
    assert calculate_nutrition_compliance({"calories": 3500, "protein": 92.5}, target) == 75
    assert calculate_nutrition_compliance({"calories": 0, "protein": 0}, target) == 0
    assert calculate_nutrition_compliance({"calories": 100}, {"calories": 0, "protein": 100}) == 0


def test_summarize_nutrition_history():
    history = [{"compliance_percentage": p} for p in (90, 85, 70, 95)]
    assert summarize_nutrition_history(history) == {"streak": 2, "avg_compliance": 85}
    assert summarize_nutrition_history([]) == {"streak": 0, "avg_compliance": 0}


def test_workout_streak_counts_back_from_today():
    dates = [TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=2), TODAY - timedelta(days=5)]
    streak = calculate_workout_streak(dates, TODAY)
    assert streak["current_streak"] == 3
    assert streak["longest_streak"] == 3
    assert streak["total_workouts"] == 4
    assert streak["this_week"] == [True, True, True, False, False, False, False]


def test_workout_streak_allows_today_not_done_yet():
    dates = ["2024-01-09", "2024-01-08"]
    assert calculate_workout_streak(dates, TODAY)["current_streak"] == 2


def test_workout_streak_no_history():
    streak = calculate_workout_streak([], TODAY)
    assert streak["current_streak"] == 0
    assert streak["this_week"] == [False] * 7


def test_weekly_volume_totals_groups_by_monday():
    sessions = [
        {"date": "2024-01-03", "total_volume": 500},
        {"date": "2024-01-01", "total_volume": 1000},
        {"date": "2023-12-29", "total_volume": 700},
    ]
    assert weekly_volume_totals(sessions) == [
        {"week": "2024-01-01", "volume": 1500},
        {"week": "2023-12-25", "volume": 700},
    ]


def test_strength_change():
    assert calculate_strength_change(100, 110) == {"change_lbs": 10, "change_percent": 10.0}
    assert calculate_strength_change(0, 50)["change_percent"] == 0


def test_measurement_changes():
    first = {"waist": 34.0, "chest": 40.0, "shoulders": None, "arms": 15.0, "thighs": 23.0}
    latest = {"waist": 33.25, "chest": 41.0, "shoulders": 48.0, "arms": 15.5, "thighs": None}
    changes = measurement_changes(first, latest)
    assert changes["waist"] == -0.7
    assert changes["chest"] == 1.0
    assert changes["shoulders"] is None
    assert changes["thighs"] is None
    assert measurement_changes(None, latest) is None
