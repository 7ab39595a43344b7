"""Strength math: 1RM estimates, progression advice, PRs and strength standards.

Exercise definitions are the dicts from program.py. Exercise-max records are
plain dicts with the keys of the exercise_maxes table (exercise_name,
one_rep_max, last_working_weight, last_reps_achieved, last_rpe,
last_session_date); a missing record is None.
"""
import math
import re

DEFAULT_STARTING_WEIGHT = 45
DELOAD_WEIGHT_FACTOR = 0.6
MAX_BRZYCKI_REPS = 36

PROGRESSION_INCREMENTS = {"heavy": 5, "moderate": 5, "light": 2.5}
WORKING_WEIGHT_PERCENTAGES = {"heavy": 0.825, "moderate": 0.725, "light": 0.625}

STRENGTH_LEVELS = ("beginner", "intermediate", "advanced", "elite")

# Bodyweight multipliers of 1RM, except Pull-ups which is a rep count
STRENGTH_STANDARDS = {
    "Barbell Bench Press": {"beginner": 0.5, "intermediate": 1.0, "advanced": 1.25, "elite": 1.75},
    "Barbell Squat": {"beginner": 0.75, "intermediate": 1.25, "advanced": 1.5, "elite": 2.25},
    "Deadlift": {"beginner": 1.0, "intermediate": 1.5, "advanced": 2.0, "elite": 2.75},
    "Overhead Press": {"beginner": 0.35, "intermediate": 0.65, "advanced": 0.85, "elite": 1.15},
    "Barbell Row": {"beginner": 0.5, "intermediate": 0.85, "advanced": 1.1, "elite": 1.5},
    "Pull-ups": {"beginner": 0, "intermediate": 10, "advanced": 20, "elite": 30},
}
REP_COUNT_STANDARDS = {"Pull-ups"}

INTENSITY_ZONES = [
    (50, "recovery", "Recovery/Warm-up"),
    (65, "endurance", "Muscular Endurance"),
    (80, "hypertrophy", "Hypertrophy"),
    (90, "strength", "Strength"),
]


def round_half_up(value):
    return int(math.floor(value + 0.5))


def round_to_nearest(value, step):
    return round_half_up(value / step) * step


def calculate_1rm(weight, reps):
    """Brzycki estimate: weight * 36 / (37 - reps).

    Outside 1-36 reps the formula is meaningless, so the weight comes back unchanged.
    """
    if reps <= 0 or reps > MAX_BRZYCKI_REPS:
        return weight
    return round_half_up(weight * 36 / (37 - reps))


def calculate_working_weight(one_rep_max, progression):
    return round_to_nearest(one_rep_max * WORKING_WEIGHT_PERCENTAGES[progression], 5)


def parse_rep_range(reps):
    """Parse "8-10" (or "8", "8-10 reps") into {"min": 8, "max": 10}."""
    cleaned = re.sub(r"[^\d-]", "", str(reps))
    parts = [part for part in cleaned.split("-") if part]
    if not parts:
        raise ValueError(f"Invalid rep range {reps!r}")
    if len(parts) >= 2:
        return {"min": int(parts[0]), "max": int(parts[1])}
    single = int(parts[0])
    return {"min": single, "max": single}


def _suggestion(weight, recommendation, should_increase=False, increase_amount=0):
    return {
        "recommended_weight": weight,
        "recommendation": recommendation,
        "should_increase": should_increase,
        "increase_amount": increase_amount,
    }


def get_progressive_overload_suggestion(exercise_max, exercise, is_deload):
    """Recommend the next working weight from the last logged performance.

    Rules are checked in order: no history, deload, max effort (RPE 10),
    hard miss (RPE 9 below the top of the range), then the rep-range checks.
    """
    if not exercise_max or exercise_max.get("last_working_weight") is None:
        return _suggestion(DEFAULT_STARTING_WEIGHT, "Start with a comfortable weight to assess your strength")

    last_weight = exercise_max["last_working_weight"]
    last_reps = exercise_max.get("last_reps_achieved") or 0
    last_rpe = exercise_max.get("last_rpe") or 0
    rep_range = parse_rep_range(exercise["reps"])

    if is_deload:
        return _suggestion(
            round_to_nearest(last_weight * DELOAD_WEIGHT_FACTOR, 5),
            "Deload week - reduce intensity for recovery",
        )

    if last_rpe >= 10:
        return _suggestion(
            last_weight,
            f"Last set was max effort. Stay at {last_weight:g} lbs until it feels easier.",
        )

    if last_rpe >= 9 and last_reps < rep_range["max"]:
        return _suggestion(
            last_weight,
            f"High effort last time. Stay at {last_weight:g} lbs and aim for {rep_range['max']} reps.",
        )

    increase_amount = 0
    should_increase = False
    if last_reps >= rep_range["max"]:
        if last_rpe <= 8:
            should_increase = True
            increase_amount = PROGRESSION_INCREMENTS.get(exercise.get("progression"), 2.5)
            if exercise.get("progression") == "heavy":
                recommendation = f"Great work! You hit {last_reps} reps. Increase by 5 lbs."
            elif exercise.get("progression") == "moderate":
                recommendation = "Solid progress! Increase by 5 lbs to keep progressing."
            else:
                recommendation = "Good job on the isolation work! Small increase of 2.5 lbs."
        else:
            recommendation = (
                f"Hit {last_reps} reps but RPE was high. "
                f"Try {last_weight:g} lbs again for a cleaner set."
            )
    elif last_reps >= rep_range["min"]:
        recommendation = f"Stay at {last_weight:g} lbs and aim for {rep_range['max']} reps."
    else:
        recommendation = f"Focus on form. Stay at {last_weight:g} lbs until you hit {rep_range['min']}+ reps."

    weight = last_weight + increase_amount if should_increase else last_weight
    return _suggestion(round_to_nearest(weight, 2.5), recommendation, should_increase, increase_amount)


def check_for_pr(exercise_name, weight, reps, current_max):
    """Report at most one PR per set; an estimated-1RM PR wins over a raw weight PR."""
    estimated = calculate_1rm(weight, reps)

    if not current_max or not current_max.get("one_rep_max"):
        return {"is_pr": True, "pr_type": "estimated_1rm", "new_value": estimated, "exercise_name": exercise_name}

    if estimated > current_max["one_rep_max"]:
        return {"is_pr": True, "pr_type": "estimated_1rm", "new_value": estimated, "exercise_name": exercise_name}

    last_weight = current_max.get("last_working_weight")
    if last_weight and weight > last_weight:
        return {"is_pr": True, "pr_type": "weight", "new_value": weight, "exercise_name": exercise_name}

    return {"is_pr": False, "pr_type": None, "new_value": 0, "exercise_name": exercise_name}


def update_exercise_max(current_max, exercise_name, weight, reps, rpe, session_date):
    """Rolling max record after a completed set. The 1RM never goes down."""
    estimated = calculate_1rm(weight, reps)
    previous = (current_max or {}).get("one_rep_max") or 0
    return {
        "exercise_name": exercise_name,
        "one_rep_max": max(estimated, previous),
        "last_working_weight": weight,
        "last_reps_achieved": reps,
        "last_rpe": rpe,
        "last_session_date": session_date,
    }


def get_intensity_zone(weight, one_rep_max):
    if not one_rep_max:
        return {"percentage": 0, "zone": "recovery", "description": "No data"}

    percentage = weight / one_rep_max * 100
    for upper, zone, description in INTENSITY_ZONES:
        if percentage < upper:
            return {"percentage": percentage, "zone": zone, "description": description}
    return {"percentage": percentage, "zone": "power", "description": "Power/Max Strength"}


def calculate_workout_volume(sets):
    """Sum of reps x weight over sets that have both actuals recorded."""
    total = 0
    for s in sets:
        reps, weight = s.get("actual_reps"), s.get("actual_weight")
        if reps and weight:
            total += reps * weight
    return total


def get_rpe_recommendation(average_rpe):
    if average_rpe < 6:
        return "Weight too light - increase by 10-15 lbs"
    if average_rpe < 7:
        return "Weight slightly light - increase by 5 lbs next session"
    if average_rpe <= 8.5:
        return "Perfect intensity - maintain this weight"
    if average_rpe <= 9:
        return "Good challenge - stay at this weight"
    return "Very challenging - consider staying at or reducing weight"


def get_strength_level(exercise_name, one_rep_max, bodyweight):
    standards = STRENGTH_STANDARDS.get(exercise_name)
    if not standards or not one_rep_max:
        return "untested"

    if exercise_name in REP_COUNT_STANDARDS:
        score = one_rep_max
    elif bodyweight:
        score = one_rep_max / bodyweight
    else:
        return "untested"

    for level in reversed(STRENGTH_LEVELS[1:]):
        if score >= standards[level]:
            return level
    return "beginner"


def get_strength_standards_for_weight(exercise_name, bodyweight):
    standards = STRENGTH_STANDARDS.get(exercise_name)
    if not standards:
        return None
    if exercise_name in REP_COUNT_STANDARDS:
        return dict(standards)
    return {level: round_half_up(bodyweight * standards[level]) for level in STRENGTH_LEVELS}
