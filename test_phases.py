from datetime import date, timedelta

import pytest

from phases import (
    PhaseObservation, PhaseState, Settings, advance_phase, check_phase_transition,
    get_daily_targets, get_phase_progress, get_phase_target_weight, weeks_in_phase,
)

PHASE_START = date(2024, 1, 1)


def make_settings(phase=PhaseState.BULK, weight=184, phase_start=PHASE_START):
    return Settings(
        current_weight=weight,
        current_phase=phase,
        wake_time="06:00",
        workout_time="07:00",
        workout_time_weekend="09:00",
        program_start_date=PHASE_START,
        phase_start_date=phase_start,
    )


def observe(weight, avg=None, days=14):
    return PhaseObservation(weight, avg if avg is not None else weight, PHASE_START + timedelta(days=days))


def test_settings_are_immutable():
    settings = make_settings()
    with pytest.raises(AttributeError):
        settings.current_weight = 190


def test_stabilized_weight_prefers_average():
    assert observe(186, avg=185.5).stabilized_weight == 185.5
    assert PhaseObservation(186, 0, PHASE_START).stabilized_weight == 186


def test_weeks_in_phase_clamps_at_zero():
    settings = make_settings()
    assert weeks_in_phase(settings, PHASE_START + timedelta(days=20)) == 2
    assert weeks_in_phase(settings, PHASE_START - timedelta(days=3)) == 0


def test_cut_transitions_at_goal_weight():
    settings = make_settings(PhaseState.CUT, weight=179.5)
    transition = check_phase_transition(settings, observe(179.5))
    assert transition.to_phase == PhaseState.MAINTAIN
    assert transition.to_dict()["should_transition"] is True
    assert transition.to_dict()["next_phase"] == "maintain"


def test_bulk_transitions_to_cut_on_average_weight():
    settings = make_settings(weight=193)
    assert check_phase_transition(settings, observe(193, avg=191)) is None
    transition = check_phase_transition(settings, observe(191, avg=192))
    assert transition.from_phase == PhaseState.BULK
    assert transition.to_phase == PhaseState.CUT


def test_bulk_transitions_at_max_duration():
    settings = make_settings(weight=186)
    transition = check_phase_transition(settings, observe(186, days=20 * 7))
    assert transition.to_phase == PhaseState.CUT
    assert "max duration" in transition.reason


def test_maintain_completes_after_min_weeks():
    settings = make_settings(PhaseState.MAINTAIN, weight=178)
    assert check_phase_transition(settings, observe(178, days=27)) is None
    transition = check_phase_transition(settings, observe(178, days=28))
    assert transition.to_phase == PhaseState.COMPLETE


def test_complete_is_terminal():
    settings = make_settings(PhaseState.COMPLETE, weight=178)
    assert advance_phase(settings, observe(178, days=400)) == (settings, None)
    assert get_phase_progress(settings, observe(178)) is None


def test_advance_phase_returns_new_settings_value():
    settings = make_settings(weight=192)
    today = PHASE_START + timedelta(days=60)
    updated, transition = advance_phase(settings, PhaseObservation(192, 192, today))

    assert transition is not None
    assert updated.current_phase == PhaseState.CUT
    assert updated.phase_start_date == today
    assert updated.program_start_date == PHASE_START
    assert settings.current_phase == PhaseState.BULK


def test_advance_phase_without_transition_keeps_settings():
    settings = make_settings(weight=186)
    assert advance_phase(settings, observe(186)) == (settings, None)


def test_phase_progress_bulk():
    settings = make_settings(weight=188)
    progress = get_phase_progress(settings, observe(188, days=28))
    assert progress["weeks_in_phase"] == 4
    assert progress["weight_progress"] == 50
    assert progress["expected_weeks_remaining"] == 8
    assert progress["on_track"] is True
    assert progress["message"] == "Gained 4.0 lbs of 8 lbs goal"


def test_phase_progress_cut_below_start_is_clamped():
    settings = make_settings(PhaseState.CUT, weight=195)
    progress = get_phase_progress(settings, observe(195, days=7))
    assert progress["weight_progress"] == 0
    assert progress["on_track"] is False
    assert progress["message"] == "3.0 lbs above start weight"


def test_phase_progress_maintain_message():
    settings = make_settings(PhaseState.MAINTAIN, weight=178)
    progress = get_phase_progress(settings, observe(178, days=14))
    assert progress["message"] == "Week 2 of 4-8 week maintenance"
    assert progress["expected_weeks_remaining"] == 6


def test_daily_targets_fall_back_to_maintain():
    assert get_daily_targets("bulk") == {"calories": 2900, "protein": 185, "carbs": 350, "fats": 80}
    assert get_daily_targets("complete") == get_daily_targets("maintain")


def test_phase_target_weight():
    assert get_phase_target_weight("bulk") == 192
    assert get_phase_target_weight("cut") == 180
    assert get_phase_target_weight("complete") == 178
