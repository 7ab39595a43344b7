"""Reads and writes against the models.

Helpers add/flush but leave the commit to the caller, like the route handlers
in app.py do. Updates replace prior values; there is no versioning.
"""
from datetime import datetime, timedelta, timezone

from sqlalchemy import or_

from models import (
    db, UserSettings, ExerciseMax, WorkoutSession, WorkoutSet,
    DailyNutrition, Meal, DailyCheckin, ProgressPhoto,
)
from analytics import calculate_nutrition_compliance, calculate_strength_change
from phases import PhaseState, Settings
from training import calculate_workout_volume, update_exercise_max

SETTINGS_DEFAULTS = {
    "height_inches": 72,
    "current_weight": 184,
    "target_weight": 178,
    "current_phase": "bulk",
    "wake_time": "06:00",
    "workout_time": "07:00",
    "workout_time_weekend": "09:00",
}

MEASUREMENT_COLUMNS = {
    "waist": "waist_measurement",
    "chest": "chest_measurement",
    "shoulders": "shoulder_measurement",
    "arms": "arm_measurement",
    "thighs": "thigh_measurement",
}


def utcnow():
    return datetime.now(timezone.utc)


def _as_utc(value):
    # SQLite hands DateTime columns back naive
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# --- Settings ---

def get_settings_row(today):
    """The singleton settings row, created with defaults on first use."""
    row = UserSettings.query.first()
    if row is None:
        row = UserSettings(program_start_date=today, phase_start_date=today, **SETTINGS_DEFAULTS)
        db.session.add(row)
        db.session.commit()
    return row


def settings_from_row(row):
    return Settings(
        height_inches=row.height_inches,
        current_weight=row.current_weight,
        target_weight=row.target_weight,
        current_phase=PhaseState(row.current_phase),
        wake_time=row.wake_time,
        workout_time=row.workout_time,
        workout_time_weekend=row.workout_time_weekend or SETTINGS_DEFAULTS["workout_time_weekend"],
        program_start_date=row.program_start_date,
        phase_start_date=row.phase_start_date or row.program_start_date,
    )


def save_settings(row, settings):
    row.height_inches = settings.height_inches
    row.current_weight = settings.current_weight
    row.target_weight = settings.target_weight
    row.current_phase = settings.current_phase.value
    row.wake_time = settings.wake_time
    row.workout_time = settings.workout_time
    row.workout_time_weekend = settings.workout_time_weekend
    row.program_start_date = settings.program_start_date
    row.phase_start_date = settings.phase_start_date
    return row


def reset_settings(row, today):
    for key, value in SETTINGS_DEFAULTS.items():
        setattr(row, key, value)
    row.program_start_date = today
    row.phase_start_date = today
    return row


# --- Exercise maxes ---

def get_exercise_max(exercise_name):
    return ExerciseMax.query.filter_by(exercise_name=exercise_name).first()


def get_all_exercise_maxes():
    return ExerciseMax.query.order_by(ExerciseMax.exercise_name).all()


def upsert_exercise_max(exercise_name, one_rep_max=None, last_working_weight=None,
                        last_reps_achieved=None, last_rpe=None, last_session_date=None):
    """Create or update a max record. Fields passed as None keep their value, except last_rpe."""
    record = get_exercise_max(exercise_name)
    if record is None:
        record = ExerciseMax(exercise_name=exercise_name)
        db.session.add(record)

    if one_rep_max is not None:
        record.one_rep_max = max(one_rep_max, record.one_rep_max or 0)
    if last_working_weight is not None:
        record.last_working_weight = last_working_weight
    if last_reps_achieved is not None:
        record.last_reps_achieved = last_reps_achieved
    record.last_rpe = last_rpe
    if last_session_date is not None:
        record.last_session_date = last_session_date
    db.session.flush()
    return record


def record_completed_set(exercise_name, weight, reps, rpe, session_date):
    current = get_exercise_max(exercise_name)
    updated = update_exercise_max(
        current.to_dict() if current else None, exercise_name, weight, reps, rpe, session_date
    )
    return upsert_exercise_max(
        exercise_name,
        one_rep_max=updated["one_rep_max"],
        last_working_weight=updated["last_working_weight"],
        last_reps_achieved=updated["last_reps_achieved"],
        last_rpe=updated["last_rpe"],
        last_session_date=updated["last_session_date"],
    )


# --- Workout sessions ---

def create_workout_session(day, workout_type, program_day, now):
    session = WorkoutSession(date=day, workout_type=workout_type, program_day=program_day, started_at=now)
    db.session.add(session)
    db.session.flush()
    return session


def get_workout_session(session_id):
    return db.session.get(WorkoutSession, session_id)


def get_workout_session_by_date(day):
    return (
        WorkoutSession.query
        .filter_by(date=day)
        .order_by(WorkoutSession.id.desc())
        .first()
    )


def complete_workout_session(session, now, notes=None):
    """Mark a session complete. A completed session is left as it was."""
    if session.completed_at is not None:
        return session
    session.completed_at = now
    elapsed = _as_utc(now) - _as_utc(session.started_at)
    session.total_duration_minutes = max(0, round(elapsed.total_seconds() / 60))
    session.notes = notes
    return session


def get_recent_workout_sessions(limit=30):
    return (
        WorkoutSession.query
        .filter(WorkoutSession.completed_at.isnot(None))
        .order_by(WorkoutSession.date.desc(), WorkoutSession.id.desc())
        .limit(limit)
        .all()
    )


def get_completed_workout_dates():
    rows = (
        db.session.query(WorkoutSession.date)
        .filter(WorkoutSession.completed_at.isnot(None))
        .distinct()
        .all()
    )
    return [row[0] for row in rows]


# --- Workout sets ---

def create_workout_set(session_id, exercise_name, set_number, target_reps, target_weight):
    workout_set = WorkoutSet(
        session_id=session_id,
        exercise_name=exercise_name,
        set_number=set_number,
        target_reps=target_reps,
        target_weight=target_weight,
    )
    db.session.add(workout_set)
    db.session.flush()
    return workout_set


def get_workout_set(set_id):
    return db.session.get(WorkoutSet, set_id)


def complete_workout_set(workout_set, actual_reps, actual_weight, now, rpe=None, rest_duration_seconds=None):
    workout_set.actual_reps = actual_reps
    workout_set.actual_weight = actual_weight
    workout_set.rpe = rpe
    workout_set.rest_duration_seconds = rest_duration_seconds
    workout_set.completed_at = now
    return workout_set


def get_session_sets(session_id):
    return WorkoutSet.query.filter_by(session_id=session_id).order_by(WorkoutSet.id).all()


def get_exercise_history(exercise_name, limit=10):
    return (
        WorkoutSet.query
        .join(WorkoutSession)
        .filter(WorkoutSet.exercise_name == exercise_name, WorkoutSet.completed_at.isnot(None))
        .order_by(WorkoutSession.date.desc(), WorkoutSet.set_number)
        .limit(limit)
        .all()
    )


def get_exercise_average_rpe(exercise_name, sessions=3):
    """Average RPE over roughly the last few sessions of rated sets."""
    rated = (
        WorkoutSet.query
        .join(WorkoutSession)
        .filter(
            WorkoutSet.exercise_name == exercise_name,
            WorkoutSet.rpe.isnot(None),
            WorkoutSession.completed_at.isnot(None),
        )
        .order_by(WorkoutSession.date.desc())
        .limit(sessions * 4)
        .all()
    )
    if not rated:
        return None
    return round(sum(s.rpe for s in rated) / len(rated), 1)


# --- Nutrition ---

def get_or_create_daily_nutrition(day, targets):
    nutrition = DailyNutrition.query.filter_by(date=day).first()
    if nutrition is None:
        nutrition = DailyNutrition(
            date=day,
            target_calories=targets["calories"],
            target_protein=targets["protein"],
            target_carbs=targets["carbs"],
            target_fats=targets["fats"],
            actual_calories=0,
            actual_protein=0,
            actual_carbs=0,
            actual_fats=0,
            compliance_percentage=0,
        )
        db.session.add(nutrition)
        db.session.flush()
    return nutrition


def materialize_meals(nutrition, meal_templates):
    """Create the day's meal rows from templates the first time the day is seen."""
    if nutrition.meals:
        return nutrition.meals
    for template in meal_templates:
        nutrition.meals.append(Meal(
            meal_number=template["meal_number"],
            meal_name=template["name"],
            scheduled_time=template["scheduled_time"],
            calories=template["macros"]["calories"],
            protein=template["macros"]["protein"],
            carbs=template["macros"]["carbs"],
            fats=template["macros"]["fats"],
            was_eaten=False,
        ))
    db.session.flush()
    return nutrition.meals


def update_nutrition_actuals(nutrition):
    eaten = [meal for meal in nutrition.meals if meal.was_eaten]
    nutrition.actual_calories = sum(meal.calories for meal in eaten)
    nutrition.actual_protein = sum(meal.protein for meal in eaten)
    nutrition.actual_carbs = sum(meal.carbs for meal in eaten)
    nutrition.actual_fats = sum(meal.fats for meal in eaten)
    nutrition.compliance_percentage = calculate_nutrition_compliance(
        {"calories": nutrition.actual_calories, "protein": nutrition.actual_protein},
        {"calories": nutrition.target_calories, "protein": nutrition.target_protein},
    )
    return nutrition


def get_meal(meal_id):
    return db.session.get(Meal, meal_id)


def log_meal(meal, was_eaten, now, notes=None):
    meal.was_eaten = bool(was_eaten)
    meal.logged_at = now
    meal.notes = notes
    return update_nutrition_actuals(meal.nutrition)


def get_nutrition_history(days, today):
    since = today - timedelta(days=days)
    return (
        DailyNutrition.query
        .filter(DailyNutrition.date >= since)
        .order_by(DailyNutrition.date.desc())
        .all()
    )


# --- Check-ins ---

def get_checkin_by_date(day):
    return DailyCheckin.query.filter_by(date=day).first()


def get_or_create_checkin(day):
    checkin = get_checkin_by_date(day)
    if checkin is None:
        checkin = DailyCheckin(date=day)
        db.session.add(checkin)
        db.session.flush()
    return checkin


def log_weight(settings_row, day, weight, notes=None):
    """Record the morning weight; it also becomes the current weight in settings."""
    checkin = get_or_create_checkin(day)
    checkin.morning_weight = weight
    if notes is not None:
        checkin.notes = notes
    settings_row.current_weight = weight
    return checkin


def log_body_measurements(day, measurements):
    checkin = get_or_create_checkin(day)
    for key, column in MEASUREMENT_COLUMNS.items():
        if measurements.get(key):
            setattr(checkin, column, measurements[key])
    return checkin


def get_recent_weights(limit=30):
    checkins = (
        DailyCheckin.query
        .filter(DailyCheckin.morning_weight.isnot(None))
        .order_by(DailyCheckin.date.desc())
        .limit(limit)
        .all()
    )
    return [{"date": c.date.isoformat(), "weight": c.morning_weight} for c in checkins]


def _has_measurements():
    return or_(*[getattr(DailyCheckin, column).isnot(None) for column in MEASUREMENT_COLUMNS.values()])


def get_recent_measurements(limit=30):
    checkins = (
        DailyCheckin.query
        .filter(_has_measurements())
        .order_by(DailyCheckin.date.desc())
        .limit(limit)
        .all()
    )
    return [c.measurements() for c in checkins]


def get_first_measurements():
    checkin = (
        DailyCheckin.query
        .filter(_has_measurements())
        .order_by(DailyCheckin.date.asc())
        .first()
    )
    return checkin.measurements() if checkin else None


# --- Photos ---

def create_progress_photo(checkin, angle, file_path, thumbnail_path):
    photo = ProgressPhoto(checkin=checkin, angle=angle, file_path=file_path, thumbnail_path=thumbnail_path)
    db.session.add(photo)
    db.session.flush()
    return photo


def get_recent_photos(limit=12):
    return (
        ProgressPhoto.query
        .join(DailyCheckin)
        .order_by(DailyCheckin.date.desc(), ProgressPhoto.created_at.desc())
        .limit(limit)
        .all()
    )


def get_comparison_photos(angle):
    """First and most recent photo for one body angle."""
    base = ProgressPhoto.query.join(DailyCheckin).filter(ProgressPhoto.angle == angle)
    first = base.order_by(DailyCheckin.date.asc()).first()
    latest = base.order_by(DailyCheckin.date.desc()).first()

    def summary(photo):
        return {"file_path": photo.file_path, "date": photo.checkin.date.isoformat()} if photo else None

    return {"first": summary(first), "latest": summary(latest)}


# --- Progress ---

def get_strength_progress():
    """First recorded working weight versus the current one, per exercise."""
    progress = []
    maxes = ExerciseMax.query.filter(ExerciseMax.last_working_weight.isnot(None)).order_by(ExerciseMax.exercise_name)
    for record in maxes:
        first_set = (
            WorkoutSet.query
            .join(WorkoutSession)
            .filter(WorkoutSet.exercise_name == record.exercise_name, WorkoutSet.actual_weight.isnot(None))
            .order_by(WorkoutSession.date.asc(), WorkoutSet.id.asc())
            .first()
        )
        if first_set:
            first_weight, first_date = first_set.actual_weight, first_set.session.date
        else:
            first_weight, first_date = record.last_working_weight, record.last_session_date

        entry = {
            "exercise_name": record.exercise_name,
            "first_weight": first_weight,
            "first_date": first_date.isoformat() if first_date else None,
            "current_weight": record.last_working_weight,
            "current_date": record.last_session_date.isoformat() if record.last_session_date else None,
            "one_rep_max": record.one_rep_max,
        }
        entry.update(calculate_strength_change(first_weight, record.last_working_weight))
        progress.append(entry)
    return progress


def get_volume_history(days, today):
    since = today - timedelta(days=days)
    sessions = (
        WorkoutSession.query
        .filter(WorkoutSession.completed_at.isnot(None), WorkoutSession.date >= since)
        .order_by(WorkoutSession.date.desc())
        .all()
    )
    return [
        {
            "date": s.date.isoformat(),
            "workout_type": s.workout_type,
            "total_volume": calculate_workout_volume([ws.to_dict() for ws in s.sets]),
            "total_sets": sum(1 for ws in s.sets if ws.completed_at is not None),
        }
        for s in sessions
    ]


def delete_all_logs():
    """Remove every logged row, children before parents."""
    for model in (ProgressPhoto, DailyCheckin, Meal, DailyNutrition, WorkoutSet, WorkoutSession, ExerciseMax):
        model.query.delete()

