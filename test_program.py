from program import (
    FOOD_DATABASE, PHASES, WORKOUT_PROGRAM, find_exercise, find_workout_by_name,
    get_all_exercises, get_meal_schedule, get_phase_config, get_workout_day,
)
from training import PROGRESSION_INCREMENTS, parse_rep_range


def test_cycle_has_seven_days_with_rest_last():
    days = [workout["day"] for workout in WORKOUT_PROGRAM["schedule"]]
    assert days == list(range(1, 8))
    assert get_workout_day(7)["exercises"] == []
    assert get_workout_day(8) is None


def test_exercises_are_well_formed():
    for workout in WORKOUT_PROGRAM["schedule"]:
        for exercise in workout["exercises"]:
            rep_range = parse_rep_range(exercise["reps"])
            assert rep_range["min"] <= rep_range["max"]
            assert exercise["progression"] in PROGRESSION_INCREMENTS
            assert exercise["rest_seconds"] > 0
            assert exercise["form_cues"]


def test_lookups():
    assert find_workout_by_name("Push (Heavy)")["day"] == 1
    assert find_workout_by_name("Arms") is None
    assert find_exercise("Deadlift")["progression"] == "heavy"
    assert find_exercise("Zercher Squat") is None
    names = get_all_exercises()
    assert names == sorted(names)
    assert "Pull-ups" in names
    assert names.count("Lateral Raise") == 1


def test_meal_schedules_have_six_meals_of_known_foods():
    for weekend in (False, True):
        meals = get_meal_schedule(weekend)["meals"]
        assert [meal["meal_number"] for meal in meals] == [1, 2, 3, 4, 5, 6]
        for meal in meals:
            for food in meal["foods"]:
                assert food["food_id"] in FOOD_DATABASE


def test_phases_chain_to_complete():
    chain = ["bulk"]
    while chain[-1] != "complete":
        chain.append(get_phase_config(chain[-1])["transition"]["next_phase"])
    assert chain == ["bulk", "cut", "maintain", "complete"]
    assert len(PHASES) == 3
    assert get_phase_config("complete") is None
