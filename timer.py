"""Rest-between-sets countdown.

The remaining time is always recomputed from the end timestamp and the
current time, so a client that was suspended or backgrounded catches up on
the next tick instead of drifting.
"""
import math
from dataclasses import dataclass, replace


def seconds_remaining(end_timestamp, now):
    """Whole seconds left until ``end_timestamp`` (both in epoch seconds), never negative."""
    return max(0, math.ceil(end_timestamp - now))


def format_time(seconds):
    return f"{seconds // 60}:{seconds % 60:02d}"


@dataclass(frozen=True)
class RestTimer:
    duration: int
    remaining: int
    end_timestamp: float = None

    @classmethod
    def for_exercise(cls, exercise):
        return cls(duration=exercise["rest_seconds"], remaining=exercise["rest_seconds"])

    @property
    def is_running(self):
        return self.end_timestamp is not None

    def start(self, now):
        if self.remaining <= 0 or self.is_running:
            return self
        return replace(self, end_timestamp=now + self.remaining)

    def pause(self, now):
        if not self.is_running:
            return self
        return replace(self, remaining=seconds_remaining(self.end_timestamp, now), end_timestamp=None)

    def reset(self, duration=None, now=None):
        """Back to a full countdown; restarts immediately when ``now`` is given."""
        duration = self.duration if duration is None else duration
        timer = RestTimer(duration=duration, remaining=duration)
        return timer.start(now) if now is not None else timer

    def add_time(self, seconds):
        remaining = max(0, self.remaining + seconds)
        if self.is_running:
            return replace(self, remaining=remaining, end_timestamp=self.end_timestamp + seconds)
        return replace(self, remaining=remaining)

    def tick(self, now):
        """Re-sync with the wall clock. Returns (timer, finished)."""
        if not self.is_running:
            return self, False
        remaining = seconds_remaining(self.end_timestamp, now)
        if remaining <= 0:
            return replace(self, remaining=0, end_timestamp=None), True
        return replace(self, remaining=remaining), False
