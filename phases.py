"""Bulk/cut/maintain phase state machine.

Settings travel as an immutable ``Settings`` value. ``advance_phase`` is the
only place a phase changes: it takes the current settings plus a weight
observation and returns the next settings value together with the transition
event (or None). Persisting the result is the caller's job.
"""
import enum
import math
from dataclasses import dataclass, replace
from datetime import date

from program import FINAL_TARGET, get_phase_config
from scheduling import parse_date

ON_TRACK_TOLERANCE_LBS = 2
FALLBACK_TARGETS_PHASE = "maintain"


class PhaseState(str, enum.Enum):
    BULK = "bulk"
    CUT = "cut"
    MAINTAIN = "maintain"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Settings:
    current_weight: float
    current_phase: PhaseState
    wake_time: str
    workout_time: str
    workout_time_weekend: str
    program_start_date: date
    phase_start_date: date
    height_inches: int = 72
    target_weight: float = 178

    def to_dict(self):
        return {
            "height_inches": self.height_inches,
            "current_weight": self.current_weight,
            "target_weight": self.target_weight,
            "current_phase": self.current_phase.value,
            "wake_time": self.wake_time,
            "workout_time": self.workout_time,
            "workout_time_weekend": self.workout_time_weekend,
            "program_start_date": self.program_start_date.isoformat(),
            "phase_start_date": self.phase_start_date.isoformat(),
        }


@dataclass(frozen=True)
class PhaseObservation:
    current_weight: float
    seven_day_avg: float
    today: date

    @property
    def stabilized_weight(self):
        # Single readings are noisy; prefer the seven-day average when there is one
        return self.seven_day_avg or self.current_weight


@dataclass(frozen=True)
class PhaseTransition:
    from_phase: PhaseState
    to_phase: PhaseState
    reason: str
    effective_date: date

    def to_dict(self):
        return {
            "should_transition": True,
            "from_phase": self.from_phase.value,
            "next_phase": self.to_phase.value,
            "reason": self.reason,
            "effective_date": self.effective_date.isoformat(),
        }


def weeks_in_phase(settings, today):
    days = (parse_date(today) - settings.phase_start_date).days
    return max(days, 0) // 7


def check_phase_transition(settings, observation):
    """Return the transition due for this observation, or None."""
    phase = get_phase_config(settings.current_phase.value)
    if phase is None:
        return None

    targets = phase["targets"]
    trigger = phase["transition"]["trigger"]
    next_phase = PhaseState(phase["transition"]["next_phase"])
    weight = observation.stabilized_weight
    weeks = weeks_in_phase(settings, observation.today)

    def event(reason):
        return PhaseTransition(settings.current_phase, next_phase, reason, observation.today)

    if trigger == "weight_reached":
        if targets["weekly_rate"] > 0 and weight >= targets["goal_weight_min"]:
            return event(f"Reached bulk goal weight of {targets['goal_weight_min']} lbs")
        if targets["weekly_rate"] < 0 and weight <= targets["goal_weight_max"]:
            return event(f"Reached cut goal weight of {targets['goal_weight_max']} lbs")

    if trigger == "duration_reached" and weeks >= phase["duration"]["min_weeks"]:
        return event(f"Completed {weeks} weeks of {phase['name']}")

    if weeks >= phase["duration"]["max_weeks"]:
        return event(f"Reached max duration of {phase['duration']['max_weeks']} weeks")

    return None


def advance_phase(settings, observation):
    """Pure transition: (settings, observation) -> (settings', event or None).

    On a transition the phase clock restarts today; the workout cycle anchor
    (program_start_date) is left alone.
    """
    transition = check_phase_transition(settings, observation)
    if transition is None:
        return settings, None
    updated = replace(settings, current_phase=transition.to_phase, phase_start_date=observation.today)
    return updated, transition


def _goal_weight(targets):
    return targets["goal_weight_max"] if targets["weekly_rate"] < 0 else targets["goal_weight_min"]


def get_phase_progress(settings, observation):
    phase = get_phase_config(settings.current_phase.value)
    if phase is None:
        return None

    targets = phase["targets"]
    weeks = weeks_in_phase(settings, observation.today)
    weight = observation.stabilized_weight
    start_weight = targets["start_weight"]
    weekly_rate = targets["weekly_rate"]
    goal_weight = _goal_weight(targets)

    total_change = goal_weight - start_weight
    weight_progress = 0
    if total_change != 0:
        weight_progress = max(0, min(100, (weight - start_weight) / total_change * 100))

    if weekly_rate != 0:
        expected_weeks_remaining = math.ceil(abs(goal_weight - weight) / abs(weekly_rate))
    else:
        expected_weeks_remaining = phase["duration"]["max_weeks"] - weeks

    expected_weight = start_weight + weeks * weekly_rate
    on_track = abs(weight - expected_weight) <= ON_TRACK_TOLERANCE_LBS

    if weekly_rate > 0:
        gained = weight - start_weight
        if gained >= 0:
            message = f"Gained {gained:.1f} lbs of {abs(total_change):.0f} lbs goal"
        else:
            message = f"{abs(gained):.1f} lbs below start weight"
    elif weekly_rate < 0:
        lost = start_weight - weight
        if lost >= 0:
            message = f"Lost {lost:.1f} lbs of {abs(total_change):.0f} lbs goal"
        else:
            message = f"{abs(lost):.1f} lbs above start weight"
    else:
        duration = phase["duration"]
        message = f"Week {weeks} of {duration['min_weeks']}-{duration['max_weeks']} week maintenance"

    return {
        "phase": phase,
        "weeks_in_phase": weeks,
        "weight_progress": weight_progress,
        "expected_weeks_remaining": expected_weeks_remaining,
        "on_track": on_track,
        "message": message,
    }


def get_daily_targets(phase_id):
    """Macro targets for a phase; unknown phases and ``complete`` use maintenance."""
    phase = get_phase_config(phase_id) or get_phase_config(FALLBACK_TARGETS_PHASE)
    targets = phase["targets"]
    return {key: targets[key] for key in ("calories", "protein", "carbs", "fats")}


def get_phase_target_weight(phase_id):
    phase = get_phase_config(phase_id)
    if phase is None:
        return FINAL_TARGET["weight"]
    return _goal_weight(phase["targets"])
