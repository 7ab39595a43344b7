import pytest

from program import find_exercise
from training import (
    calculate_1rm, calculate_working_weight, calculate_workout_volume, check_for_pr,
    get_intensity_zone, get_progressive_overload_suggestion, get_rpe_recommendation,
    get_strength_level, get_strength_standards_for_weight, parse_rep_range,
    round_half_up, update_exercise_max,
)

BENCH = find_exercise("Barbell Bench Press")
LATERAL_RAISE = find_exercise("Lateral Raise")


def bench_max(weight=185, reps=6, rpe=8, one_rep_max=215):
    return {
        "exercise_name": "Barbell Bench Press",
        "one_rep_max": one_rep_max,
        "last_working_weight": weight,
        "last_reps_achieved": reps,
        "last_rpe": rpe,
    }


def test_round_half_up_rounds_halves_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-0.5) == 0


def test_calculate_1rm_brzycki():
    assert calculate_1rm(200, 5) == 225
    assert calculate_1rm(135, 10) == 180
    assert calculate_1rm(225, 1) == 225


def test_calculate_1rm_out_of_range_returns_weight():
    assert calculate_1rm(200, 0) == 200
    assert calculate_1rm(200, -3) == 200
    assert calculate_1rm(200, 37) == 200


def test_calculate_1rm_increases_with_reps():
    estimates = [calculate_1rm(100, reps) for reps in range(1, 37)]
    assert estimates == sorted(estimates)


def test_calculate_working_weight_rounds_to_five():
    assert calculate_working_weight(200, "heavy") == 165
    assert calculate_working_weight(200, "light") == 125


def test_parse_rep_range():
    assert parse_rep_range("8-10") == {"min": 8, "max": 10}
    assert parse_rep_range("12") == {"min": 12, "max": 12}
    assert parse_rep_range("6-8 reps") == {"min": 6, "max": 8}
    with pytest.raises(ValueError):
        parse_rep_range("")


def test_suggestion_without_history_starts_at_default():
    suggestion = get_progressive_overload_suggestion(None, BENCH, False)
    assert suggestion["recommended_weight"] == 45
    assert suggestion["should_increase"] is False


def test_suggestion_deload_takes_sixty_percent():
    suggestion = get_progressive_overload_suggestion(bench_max(), BENCH, True)
    assert suggestion["recommended_weight"] == 110
    assert suggestion["should_increase"] is False


def test_suggestion_max_effort_holds_even_at_top_of_range():
    suggestion = get_progressive_overload_suggestion(bench_max(rpe=10), BENCH, False)
    assert suggestion["recommended_weight"] == 185
    assert suggestion["should_increase"] is False


def test_suggestion_hard_miss_holds():
    suggestion = get_progressive_overload_suggestion(bench_max(reps=5, rpe=9), BENCH, False)
    assert suggestion["recommended_weight"] == 185
    assert "aim for 6" in suggestion["recommendation"]


def test_suggestion_top_of_range_increases_heavy_by_five():
    suggestion = get_progressive_overload_suggestion(bench_max(), BENCH, False)
    assert suggestion["recommended_weight"] == 190
    assert suggestion["should_increase"] is True
    assert suggestion["increase_amount"] == 5


def test_suggestion_top_of_range_at_rpe_nine_holds():
    suggestion = get_progressive_overload_suggestion(bench_max(rpe=9), BENCH, False)
    assert suggestion["recommended_weight"] == 185
    assert suggestion["should_increase"] is False
    assert "RPE was high" in suggestion["recommendation"]


def test_suggestion_light_increment():
    record = {"last_working_weight": 20, "last_reps_achieved": 15, "last_rpe": 7}
    suggestion = get_progressive_overload_suggestion(record, LATERAL_RAISE, False)
    assert suggestion["recommended_weight"] == 22.5
    assert suggestion["increase_amount"] == 2.5


def test_suggestion_below_minimum_focuses_on_form():
    suggestion = get_progressive_overload_suggestion(bench_max(reps=3, rpe=7), BENCH, False)
    assert suggestion["recommended_weight"] == 185
    assert suggestion["recommendation"].startswith("Focus on form")


def test_check_for_pr_first_set_is_a_pr():
    pr = check_for_pr("Deadlift", 225, 5, None)
    assert pr == {"is_pr": True, "pr_type": "estimated_1rm", "new_value": 253, "exercise_name": "Deadlift"}


def test_check_for_pr_prefers_estimated_1rm():
    current = {"one_rep_max": 225, "last_working_weight": 200}
    assert check_for_pr("Bench", 205, 5, current)["pr_type"] == "estimated_1rm"
    assert check_for_pr("Bench", 205, 1, current)["pr_type"] == "weight"
    assert check_for_pr("Bench", 195, 5, current)["is_pr"] is False


def test_update_exercise_max_never_lowers_1rm():
    updated = update_exercise_max({"one_rep_max": 250}, "Deadlift", 200, 5, 8, None)
    assert updated["one_rep_max"] == 250
    assert updated["last_working_weight"] == 200
    assert updated["last_rpe"] == 8


def test_intensity_zone():
    zone = get_intensity_zone(150, 200)
    assert zone["percentage"] == 75
    assert zone["zone"] == "hypertrophy"
    assert get_intensity_zone(190, 200)["zone"] == "power"
    assert get_intensity_zone(100, 0) == {"percentage": 0, "zone": "recovery", "description": "No data"}


def test_workout_volume_skips_incomplete_sets():
    sets = [
        {"actual_reps": 5, "actual_weight": 100},
        {"actual_reps": 8, "actual_weight": 50},
        {"actual_reps": None, "actual_weight": 100},
    ]
    assert calculate_workout_volume(sets) == 900


def test_rpe_recommendation_bands():
    assert "too light" in get_rpe_recommendation(5)
    assert "Perfect" in get_rpe_recommendation(8)
    assert "Very challenging" in get_rpe_recommendation(9.5)


def test_strength_level():
    assert get_strength_level("Barbell Bench Press", 200, 185) == "intermediate"
    assert get_strength_level("Pull-ups", 12, 185) == "intermediate"
    assert get_strength_level("Barbell Bench Press", 0, 185) == "untested"
    assert get_strength_level("Cable Fly", 100, 185) == "untested"


def test_strength_standards_for_weight():
    standards = get_strength_standards_for_weight("Barbell Bench Press", 200)
    assert standards == {"beginner": 100, "intermediate": 200, "advanced": 250, "elite": 350}
    assert get_strength_standards_for_weight("Pull-ups", 200)["advanced"] == 20
    assert get_strength_standards_for_weight("Cable Fly", 200) is None
