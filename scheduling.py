"""Calendar math for the training cycle and the daily meal clock.

Every function takes "today" explicitly; nothing here reads the system clock.
Dates are local calendar dates, never UTC instants.
"""
import re
from datetime import date, datetime, timedelta

from program import get_meal_schedule, get_workout_day

CYCLE_DAYS = 7
REST_DAY = 7
DELOAD_EVERY_WEEKS = 4
DELOAD_FACTOR = 0.6
PHOTO_ANGLES = ("front", "side", "back")
# Indexed by date.weekday()
DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

PRE_WORKOUT_LEAD_MINUTES = 75
POST_WORKOUT_DELAY_MINUTES = 90
MEAL_SPACING_MINUTES = 180
BEFORE_BED_SPACING_MINUTES = 150
BREAKFAST_AFTER_WAKE_MINUTES = 30
QUICK_BREAKFAST_AFTER_WAKE_MINUTES = 15
MIN_BREAKFAST_GAP_MINUTES = 60
MINUTES_PER_DAY = 24 * 60

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_date(value):
    """Parse a YYYY-MM-DD string. Dates and datetimes pass through as dates."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def parse_clock(value):
    """Parse a 24-hour HH:MM string into minutes after midnight."""
    match = _CLOCK_RE.match(value or "")
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return hours * 60 + minutes


def format_minutes(minutes):
    minutes = minutes % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def days_since(start_date, today):
    return (parse_date(today) - parse_date(start_date)).days


def get_current_program_day(program_start_date, today):
    """Program day 1-7 for today, counted from the program start date."""
    return days_since(program_start_date, today) % CYCLE_DAYS + 1


def get_today_workout(program_start_date, today):
    return get_workout_day(get_current_program_day(program_start_date, today))


def is_rest_day(program_start_date, today):
    return get_current_program_day(program_start_date, today) == REST_DAY


def get_week_schedule(program_start_date, today):
    """The next seven days starting today, each paired with its program day."""
    today = parse_date(today)
    current_day = get_current_program_day(program_start_date, today)

    schedule = []
    for offset in range(CYCLE_DAYS):
        day = today + timedelta(days=offset)
        program_day = (current_day - 1 + offset) % CYCLE_DAYS + 1
        schedule.append({
            "date": day.isoformat(),
            "day_name": DAY_NAMES[day.weekday()],
            "is_today": offset == 0,
            "program_day": program_day,
            "workout": get_workout_day(program_day),
        })
    return schedule


def is_weekend(day):
    return parse_date(day).weekday() >= 5


def get_current_workout_time(weekday_time, weekend_time, today):
    return weekend_time if is_weekend(today) else weekday_time


def get_current_week_number(program_start_date, today):
    return days_since(program_start_date, today) // 7 + 1


def is_deload_week(program_start_date, today):
    """Every fourth week of the program is a deload week."""
    return get_current_week_number(program_start_date, today) % DELOAD_EVERY_WEEKS == 0


def get_deload_factor(program_start_date, today):
    return DELOAD_FACTOR if is_deload_week(program_start_date, today) else 1.0


def get_today_photo_angle(program_start_date, today):
    return PHOTO_ANGLES[days_since(program_start_date, today) % len(PHOTO_ANGLES)]


def get_daily_targets_from_schedule(is_weekend_day):
    totals = {"calories": 0, "protein": 0, "carbs": 0, "fats": 0}
    for meal in get_meal_schedule(is_weekend_day)["meals"]:
        for key in totals:
            totals[key] += meal["macros"][key]
    return totals


def _workout_meal_minutes(wake_minutes, workout_minutes):
    pre_workout = workout_minutes - PRE_WORKOUT_LEAD_MINUTES
    post_workout = workout_minutes + POST_WORKOUT_DELAY_MINUTES
    lunch = post_workout + MEAL_SPACING_MINUTES
    snack = lunch + MEAL_SPACING_MINUTES
    dinner = snack + MEAL_SPACING_MINUTES

    if pre_workout - wake_minutes >= MIN_BREAKFAST_GAP_MINUTES:
        breakfast = wake_minutes + BREAKFAST_AFTER_WAKE_MINUTES
        return [breakfast, pre_workout, post_workout, lunch, snack, dinner]

    breakfast = max(wake_minutes + QUICK_BREAKFAST_AFTER_WAKE_MINUTES, pre_workout)
    before_bed = dinner + BEFORE_BED_SPACING_MINUTES
    return [breakfast, post_workout, lunch, snack, dinner, before_bed]


def get_meal_times(wake_time, phase=None, workout_time=None, is_weekend_day=False):
    """Six meals for the day, in the order they should be eaten.

    Without a workout time the template clock times are used as-is. With one,
    meals are anchored around the session: pre-workout 75 minutes before,
    post-workout 90 minutes after the start, then three-hour spacing. Foods and
    macros always come from the template at the same index; only the time moves.
    Times past midnight wrap but keep their place in the day's order;
    ``day_minutes`` counts from the start of the day without wrapping and
    ``next_day`` marks meals that fall after midnight.
    """
    templates = get_meal_schedule(is_weekend_day)["meals"]

    if not workout_time:
        meals = [(parse_clock(t["time"]), t["time"], t) for t in templates]
    else:
        offsets = _workout_meal_minutes(parse_clock(wake_time), parse_clock(workout_time))
        meals = [(m, format_minutes(m), t) for m, t in zip(offsets, templates)]

    meals.sort(key=lambda item: item[0])
    return [
        {
            "meal_number": template["meal_number"],
            "name": template["name"],
            "scheduled_time": scheduled_time,
            "day_minutes": minutes,
            "next_day": minutes >= MINUTES_PER_DAY,
            "macros": dict(template["macros"]),
            "foods": [{"display": food["display"]} for food in template["foods"]],
        }
        for minutes, scheduled_time, template in meals
    ]
