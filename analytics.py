"""Progress analytics over logged history.

All functions degrade to neutral values for a brand-new user with no history.
"""
import math
from datetime import timedelta

from scheduling import parse_date
from training import round_half_up

TREND_WINDOW = 7
TREND_MIN_ENTRIES = 14
TREND_THRESHOLD = 0.3
COMPLIANT_DAY_PERCENTAGE = 80
MEASUREMENT_KEYS = ("waist", "chest", "shoulders", "arms", "thighs")


def _round1(value):
    return round_half_up(value * 10) / 10


def _mean(values):
    return sum(values) / len(values) if values else 0


def calculate_weight_trend(weights):
    """Seven-day average and week-over-week change.

    ``weights`` is newest first, one {"date", "weight"} per check-in. The change
    needs two full weeks of entries; with less it is reported as 0/stable.
    """
    values = [entry["weight"] for entry in weights]
    seven_day_avg = _mean(values[:TREND_WINDOW])

    if len(values) < TREND_MIN_ENTRIES:
        return {"weekly_change": 0, "trend": "stable", "seven_day_avg": _round1(seven_day_avg)}

    previous_avg = _mean(values[TREND_WINDOW:TREND_MIN_ENTRIES])
    weekly_change = _round1(seven_day_avg - previous_avg)

    trend = "stable"
    if weekly_change > TREND_THRESHOLD:
        trend = "up"
    elif weekly_change < -TREND_THRESHOLD:
        trend = "down"

    return {"weekly_change": weekly_change, "trend": trend, "seven_day_avg": _round1(seven_day_avg)}


def calculate_goal_date(current_weight, target_weight, weekly_rate, today):
    """Projected date for reaching the target at a signed weekly rate, or None."""
    if weekly_rate == 0:
        return None

    today = parse_date(today)
    to_change = target_weight - current_weight
    if (weekly_rate > 0 and to_change <= 0) or (weekly_rate < 0 and to_change >= 0):
        return {"date": today, "weeks_remaining": 0}

    weeks_remaining = math.ceil(abs(to_change) / abs(weekly_rate))
    return {"date": today + timedelta(weeks=weeks_remaining), "weeks_remaining": weeks_remaining}


def calculate_nutrition_compliance(actual, target):
    """Average of calorie and protein adherence, each capped at 100%."""
    if not target.get("calories"):
        return 0

    calories = min(100, actual.get("calories", 0) / target["calories"] * 100)
    if target.get("protein"):
        protein = min(100, actual.get("protein", 0) / target["protein"] * 100)
    else:
        protein = 100
    return round_half_up((calories + protein) / 2)


def summarize_nutrition_history(history):
    """Leading streak of compliant days and the average, for newest-first history."""
    streak = 0
    for day in history:
        if day["compliance_percentage"] < COMPLIANT_DAY_PERCENTAGE:
            break
        streak += 1

    average = _mean([day["compliance_percentage"] for day in history])
    return {"streak": streak, "avg_compliance": round_half_up(average)}


def calculate_workout_streak(workout_dates, today):
    """Current and longest runs of consecutive workout days, plus this week's days.

    The current streak counts back from today, or from yesterday when today has
    no workout yet. ``this_week`` runs Monday to Sunday.
    """
    today = parse_date(today)
    dates = {parse_date(d) for d in workout_dates}
    this_week_start = week_start(today)
    this_week = [this_week_start + timedelta(days=i) in dates for i in range(7)]

    if not dates:
        return {"current_streak": 0, "longest_streak": 0, "total_workouts": 0, "this_week": this_week}

    current = 0
    check = today if today in dates else today - timedelta(days=1)
    while check in dates:
        current += 1
        check -= timedelta(days=1)

    longest = run = 0
    previous = None
    for day in sorted(dates):
        run = run + 1 if previous is not None and (day - previous).days == 1 else 1
        longest = max(longest, run)
        previous = day

    return {
        "current_streak": current,
        "longest_streak": longest,
        "total_workouts": len(dates),
        "this_week": this_week,
    }


def week_start(day):
    day = parse_date(day)
    return day - timedelta(days=day.weekday())


def weekly_volume_totals(sessions):
    """Sum session volume per Monday-starting week, newest week first."""
    totals = {}
    for session in sessions:
        key = week_start(session["date"]).isoformat()
        totals[key] = totals.get(key, 0) + (session.get("total_volume") or 0)
    return [{"week": week, "volume": totals[week]} for week in sorted(totals, reverse=True)]


def calculate_strength_change(first_weight, current_weight):
    change = current_weight - first_weight
    percent = change / first_weight * 100 if first_weight > 0 else 0
    return {"change_lbs": change, "change_percent": _round1(percent)}


def measurement_changes(first, latest):
    if not first or not latest:
        return None
    changes = {}
    for key in MEASUREMENT_KEYS:
        if first.get(key) is None or latest.get(key) is None:
            changes[key] = None
        else:
            changes[key] = _round1(latest[key] - first[key])
    return changes
