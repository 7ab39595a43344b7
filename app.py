import functools
import os
import shutil
from dataclasses import replace
from datetime import date

from dotenv import load_dotenv
from flask import Flask, jsonify, request, send_file, send_from_directory
from loguru import logger

load_dotenv()

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "ascend-dev-key-change-me")

app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get("DATABASE_URL", "sqlite:///ascend.db")
app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
app.config["PHOTO_DIR"] = os.environ.get("PHOTO_DIR", os.path.join(app.instance_path, "photos"))

from models import db
import queries
from analytics import (
    calculate_goal_date, calculate_weight_trend, calculate_workout_streak,
    measurement_changes, summarize_nutrition_history, weekly_volume_totals,
)
from phases import (
    PhaseObservation, PhaseState, advance_phase, get_daily_targets,
    get_phase_progress, get_phase_target_weight,
)
from program import find_exercise, find_workout_by_name, get_all_exercises, get_phase_config
from scheduling import (
    PHOTO_ANGLES, days_since, get_current_program_day, get_current_week_number,
    get_current_workout_time, get_daily_targets_from_schedule, get_meal_times, get_today_photo_angle,
    get_today_workout, get_week_schedule, is_deload_week, is_rest_day, is_weekend, parse_clock, parse_date,
)
from training import (
    calculate_working_weight, calculate_workout_volume, check_for_pr, get_intensity_zone,
    get_progressive_overload_suggestion, get_rpe_recommendation, get_strength_level,
    get_strength_standards_for_weight, parse_rep_range,
)

db.init_app(app)

with app.app_context():
    db.create_all()


def get_today():
    return date.today()


def get_now():
    return queries.utcnow()


class NotFound(Exception):
    pass


class Conflict(Exception):
    pass


def api_errors(failure_message):
    """Map malformed input to 400, missing rows to 404, anything else to a logged 500."""
    def decorator(view):
        @functools.wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValueError as e:
                db.session.rollback()
                return jsonify({"error": str(e)}), 400
            except NotFound as e:
                db.session.rollback()
                return jsonify({"error": str(e)}), 404
            except Conflict as e:
                db.session.rollback()
                return jsonify({"error": str(e)}), 409
            except Exception:
                db.session.rollback()
                logger.exception(f"{request.method} {request.path}: {failure_message}")
                return jsonify({"error": failure_message}), 500
        return wrapper
    return decorator


@app.after_request
def no_store(response):
    if request.method == "GET" and request.path.startswith("/api/"):
        response.headers["Cache-Control"] = "no-store"
    return response


def _json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValueError("Expected a JSON object body")
    return body


def _require(body, key):
    value = body.get(key)
    if value is None or value == "":
        raise ValueError(f"{key} is required")
    return value


def _require_number(body, key, cast=float):
    value = _require(body, key)
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number") from None
    if cast is int:
        if not number.is_integer():
            raise ValueError(f"{key} must be a whole number")
        return int(number)
    return cast(number)


def _optional_number(body, key, cast=float):
    if body.get(key) in (None, ""):
        return None
    return _require_number(body, key, cast)


def _optional_rpe(body):
    rpe = _optional_number(body, "rpe", int)
    if rpe is not None and not 1 <= rpe <= 10:
        raise ValueError("rpe must be between 1 and 10")
    return rpe


def _date_arg(value, default):
    return parse_date(value) if value else default


def _compute(label, fn, *args):
    """One failing field must not take the whole aggregate down."""
    try:
        return fn(*args)
    except Exception:
        logger.exception(f"Failed to compute {label}")
        return None


def _load_settings(today):
    row = queries.get_settings_row(today)
    return row, queries.settings_from_row(row)


def _observation(settings, today, weights=None):
    weights = queries.get_recent_weights(30) if weights is None else weights
    trend = _compute("weight trend", calculate_weight_trend, weights)
    seven_day_avg = trend["seven_day_avg"] if trend else 0
    return PhaseObservation(settings.current_weight, seven_day_avg, today), trend


def _settings_payload(settings):
    payload = settings.to_dict()
    payload["target_weight"] = get_phase_target_weight(settings.current_phase.value)
    return payload


# --- Dashboard ---

@app.route("/api/dashboard")
@api_errors("Failed to fetch dashboard data")
def dashboard():
    today = get_today()
    row, settings = _load_settings(today)

    recent_weights = queries.get_recent_weights(30)
    observation, weight_trend = _observation(settings, today, recent_weights)

    transition = None
    stepped = _compute("phase transition", advance_phase, settings, observation)
    if stepped:
        settings, transition = stepped
    if transition:
        queries.save_settings(row, settings)
        db.session.commit()
        logger.info(
            f"Phase transition {transition.from_phase.value} -> {transition.to_phase.value}: {transition.reason}"
        )

    phase_progress = _compute("phase progress", get_phase_progress, settings, observation)

    start = settings.program_start_date
    todays_workout = get_today_workout(start, today)
    checkin = queries.get_checkin_by_date(today)

    daily_targets = get_daily_targets(settings.current_phase.value)
    workout_time = get_current_workout_time(settings.workout_time, settings.workout_time_weekend, today)
    weekend = is_weekend(today)
    meal_times = get_meal_times(settings.wake_time, settings.current_phase.value, workout_time, weekend)

    nutrition = queries.get_or_create_daily_nutrition(today, daily_targets)
    meals = {meal.meal_number: meal for meal in queries.materialize_meals(nutrition, meal_times)}
    db.session.commit()

    meals_with_status = []
    for template in meal_times:
        meal = meals.get(template["meal_number"])
        meals_with_status.append({
            "meal_number": template["meal_number"],
            "name": template["name"],
            "scheduled_time": template["scheduled_time"],
            "calories": template["macros"]["calories"],
            "protein": template["macros"]["protein"],
            "logged_at": meal.logged_at.isoformat() if meal and meal.logged_at else None,
            "was_eaten": bool(meal and meal.was_eaten),
        })

    today_session = queries.get_workout_session_by_date(today)
    streak = _compute(
        "workout streak", calculate_workout_streak, queries.get_completed_workout_dates(), today
    )

    return jsonify({
        "settings": _settings_payload(settings),
        "program_day": get_current_program_day(start, today),
        "days_since_start": days_since(start, today) + 1,
        "is_rest_day": is_rest_day(start, today),
        "is_deload_week": is_deload_week(start, today),
        "today_workout": todays_workout,
        "today_workout_complete": bool(today_session and today_session.completed_at),
        "today_checkin": checkin.to_dict() if checkin else None,
        "recent_weights": recent_weights,
        "weight_trend": weight_trend,
        "daily_targets": daily_targets,
        "meal_times": meal_times,
        "meals_with_status": meals_with_status,
        "nutrition": {
            "actual_calories": nutrition.actual_calories or 0,
            "actual_protein": nutrition.actual_protein or 0,
            "actual_carbs": nutrition.actual_carbs or 0,
            "actual_fats": nutrition.actual_fats or 0,
        },
        "exercise_maxes": [m.to_dict() for m in queries.get_all_exercise_maxes()],
        "streak": streak,
        "today_workout_time": workout_time,
        "is_weekend": weekend,
        "phase_progress": phase_progress,
        "phase_transition": transition.to_dict() if transition else None,
    })


# --- Workouts ---

def _session_with_sets(session):
    if session is None:
        return {"session": None, "sets": []}
    return {"session": session.to_dict(), "sets": [s.to_dict() for s in queries.get_session_sets(session.id)]}


@app.route("/api/workouts")
@api_errors("Failed to fetch workout")
def workouts():
    session_id = request.args.get("session_id", type=int)
    if session_id is not None:
        session = queries.get_workout_session(session_id)
        if session is None:
            raise NotFound("Session not found")
        return jsonify(_session_with_sets(session))

    if request.args.get("latest") == "true":
        recent = queries.get_recent_workout_sessions(1)
        return jsonify(_session_with_sets(recent[0] if recent else None))

    if request.args.get("date"):
        day = parse_date(request.args["date"])
        return jsonify(_session_with_sets(queries.get_workout_session_by_date(day)))

    today = get_today()
    _, settings = _load_settings(today)
    existing = queries.get_workout_session_by_date(today)
    return jsonify({
        "today_workout": get_today_workout(settings.program_start_date, today),
        "program_day": get_current_program_day(settings.program_start_date, today),
        "existing_session": existing.to_dict() if existing else None,
        "week_schedule": get_week_schedule(settings.program_start_date, today),
    })


@app.route("/api/workouts", methods=["POST"])
@api_errors("Failed to process workout action")
def workout_action():
    body = _json_body()
    action = body.get("action")

    if action == "start":
        today = get_today()
        _, settings = _load_settings(today)
        todays_workout = get_today_workout(settings.program_start_date, today)
        if todays_workout is None or is_rest_day(settings.program_start_date, today):
            return jsonify({"error": "No workout scheduled for today"}), 400

        session = queries.create_workout_session(
            today, todays_workout["name"], get_current_program_day(settings.program_start_date, today), get_now()
        )
        db.session.commit()
        return jsonify({"session": session.to_dict(), "workout": todays_workout})

    if action == "complete":
        session = queries.get_workout_session(_require_number(body, "session_id", int))
        if session is None:
            raise NotFound("Session not found")
        queries.complete_workout_session(session, get_now(), body.get("notes"))
        db.session.commit()
        sets = [s.to_dict() for s in session.sets]
        return jsonify({"session": session.to_dict(), "volume": calculate_workout_volume(sets)})

    return jsonify({"error": "Invalid action"}), 400


@app.route("/api/workouts/suggestions")
@api_errors("Failed to build suggestions")
def workout_suggestions():
    today = get_today()
    _, settings = _load_settings(today)

    session_id = request.args.get("session_id", type=int)
    if session_id is not None:
        session = queries.get_workout_session(session_id)
        if session is None:
            raise NotFound("Session not found")
        workout = find_workout_by_name(session.workout_type)
    else:
        workout = get_today_workout(settings.program_start_date, today)

    deload = is_deload_week(settings.program_start_date, today)
    suggestions = []
    for exercise in (workout or {}).get("exercises", []):
        record = queries.get_exercise_max(exercise["name"])
        current_max = record.to_dict() if record else None
        suggestion = get_progressive_overload_suggestion(current_max, exercise, deload)
        one_rep_max = (current_max or {}).get("one_rep_max") or 0
        average_rpe = queries.get_exercise_average_rpe(exercise["name"])
        suggestions.append({
            "exercise": exercise,
            "rep_range": parse_rep_range(exercise["reps"]),
            "working_weight": calculate_working_weight(one_rep_max, exercise["progression"]) if one_rep_max else None,
            "exercise_max": current_max,
            "suggestion": suggestion,
            "intensity": get_intensity_zone(suggestion["recommended_weight"], one_rep_max),
            "strength_level": get_strength_level(exercise["name"], one_rep_max, settings.current_weight),
            "last_sets": [s.to_dict() for s in queries.get_exercise_history(exercise["name"], exercise["sets"])],
            "average_rpe": average_rpe,
            "rpe_recommendation": get_rpe_recommendation(average_rpe) if average_rpe is not None else None,
        })

    return jsonify({"workout": workout, "is_deload": deload, "exercises": suggestions})


@app.route("/api/workouts/sets")
@api_errors("Failed to fetch sets")
def workout_sets():
    session_id = request.args.get("session_id", type=int)
    if session_id is None:
        return jsonify({"error": "Session ID required"}), 400
    return jsonify([s.to_dict() for s in queries.get_session_sets(session_id)])


@app.route("/api/workouts/sets", methods=["POST"])
@api_errors("Failed to process set action")
def workout_set_action():
    body = _json_body()
    action = body.get("action")

    if action == "create":
        session_id = _require_number(body, "session_id", int)
        session = queries.get_workout_session(session_id)
        if session is None:
            raise NotFound("Session not found")
        if session.completed_at is not None:
            raise Conflict("Session already completed")
        workout_set = queries.create_workout_set(
            session_id,
            _require(body, "exercise_name"),
            _require_number(body, "set_number", int),
            _require_number(body, "target_reps", int),
            _require_number(body, "target_weight"),
        )
        db.session.commit()
        return jsonify({"set_id": workout_set.id})

    if action == "complete":
        workout_set = queries.get_workout_set(_require_number(body, "set_id", int))
        if workout_set is None:
            raise NotFound("Set not found")
        if workout_set.completed_at is not None:
            raise Conflict("Set already completed")
        if workout_set.session.completed_at is not None:
            raise Conflict("Session already completed")

        actual_reps = _require_number(body, "actual_reps", int)
        actual_weight = _require_number(body, "actual_weight")
        rpe = _optional_rpe(body)
        rest = _optional_number(body, "rest_duration_seconds", int)
        exercise_name = body.get("exercise_name") or workout_set.exercise_name

        # PRs are judged against the max as it stood before this set
        current = queries.get_exercise_max(exercise_name)
        pr = check_for_pr(exercise_name, actual_weight, actual_reps, current.to_dict() if current else None)

        queries.complete_workout_set(workout_set, actual_reps, actual_weight, get_now(), rpe, rest)
        exercise_max = None
        if actual_reps and actual_weight:
            exercise_max = queries.record_completed_set(
                exercise_name, actual_weight, actual_reps, rpe, workout_set.session.date
            ).to_dict()
        db.session.commit()
        return jsonify({"success": True, "set": workout_set.to_dict(), "pr": pr, "exercise_max": exercise_max})

    return jsonify({"error": "Invalid action"}), 400


# --- Exercise maxes ---

@app.route("/api/exercise-max")
@api_errors("Failed to fetch exercise max")
def exercise_max():
    name = request.args.get("exercise")
    if name:
        record = queries.get_exercise_max(name)
        return jsonify(record.to_dict() if record else {"exercise_name": name, "needs_input": True})
    return jsonify([m.to_dict() for m in queries.get_all_exercise_maxes()])


@app.route("/api/exercise-max", methods=["POST"])
@api_errors("Failed to update exercise max")
def exercise_max_update():
    body = _json_body()
    record = queries.upsert_exercise_max(
        _require(body, "exercise_name"),
        one_rep_max=_optional_number(body, "one_rep_max"),
        last_working_weight=_optional_number(body, "last_working_weight"),
        last_reps_achieved=_optional_number(body, "last_reps_achieved", int),
        last_session_date=get_today(),
    )
    db.session.commit()
    return jsonify(record.to_dict())


@app.route("/api/exercises")
@api_errors("Failed to fetch exercises")
def exercises():
    """Every exercise in the cycle with its definition and current max."""
    catalog = []
    for name in get_all_exercises():
        record = queries.get_exercise_max(name)
        catalog.append({
            "exercise": find_exercise(name),
            "exercise_max": record.to_dict() if record else None,
        })
    return jsonify(catalog)


# --- Nutrition ---

@app.route("/api/nutrition")
@api_errors("Failed to fetch nutrition")
def nutrition():
    today = get_today()
    day = _date_arg(request.args.get("date"), today)
    _, settings = _load_settings(today)

    targets = get_daily_targets(settings.current_phase.value)
    weekend = is_weekend(day)
    workout_time = settings.workout_time_weekend if weekend else settings.workout_time
    templates = get_meal_times(settings.wake_time, settings.current_phase.value, workout_time, weekend)

    record = queries.get_or_create_daily_nutrition(day, targets)
    meals = {meal.meal_number: meal for meal in queries.materialize_meals(record, templates)}
    db.session.commit()

    merged = []
    for template in templates:
        meal = meals.get(template["meal_number"])
        logged = meal is not None and meal.logged_at is not None
        merged.append({
            "id": meal.id if meal else None,
            "meal_number": template["meal_number"],
            "meal_name": template["name"],
            "scheduled_time": template["scheduled_time"],
            "next_day": template["next_day"],
            "calories": template["macros"]["calories"],
            "protein": template["macros"]["protein"],
            "carbs": template["macros"]["carbs"],
            "fats": template["macros"]["fats"],
            "logged_at": meal.logged_at.isoformat() if logged else None,
            "was_eaten": meal.was_eaten if logged else None,
            "notes": meal.notes if meal else None,
            "foods": template["foods"],
        })

    return jsonify({
        "nutrition": record.to_dict(),
        "meals": merged,
        "targets": targets,
        "template_totals": get_daily_targets_from_schedule(weekend),
        "phase": settings.current_phase.value,
        "workout_time": workout_time,
        "is_weekend": weekend,
    })


@app.route("/api/nutrition", methods=["POST"])
@api_errors("Failed to log meal")
def nutrition_action():
    body = _json_body()
    if body.get("action") != "log_meal":
        return jsonify({"error": "Invalid action"}), 400

    meal = queries.get_meal(_require_number(body, "meal_id", int))
    if meal is None:
        raise NotFound("Meal not found")
    record = queries.log_meal(meal, body.get("was_eaten", True), get_now(), body.get("notes"))
    db.session.commit()
    return jsonify({"success": True, "nutrition": record.to_dict()})


# --- Check-ins and photos ---

@app.route("/api/checkins")
@api_errors("Failed to fetch checkin")
def checkins():
    kind = request.args.get("type")

    if kind == "photos":
        return jsonify({"photos": [p.to_dict() for p in queries.get_recent_photos(12)]})

    if kind == "weights":
        weights = queries.get_recent_weights(90)
        return jsonify({"weights": weights, "trend": calculate_weight_trend(weights)})

    today = get_today()
    day = _date_arg(request.args.get("date"), today)
    _, settings = _load_settings(today)
    checkin = queries.get_checkin_by_date(day)
    recent_weights = queries.get_recent_weights(14)

    return jsonify({
        "checkin": checkin.to_dict() if checkin else None,
        "photos": [p.to_dict() for p in checkin.photos] if checkin else [],
        "recent_weights": recent_weights,
        "trend": calculate_weight_trend(recent_weights),
        "today_angle": get_today_photo_angle(settings.program_start_date, today),
        "settings": _settings_payload(settings),
    })


def _save_photo(upload, day, angle):
    photo_dir = app.config["PHOTO_DIR"]
    os.makedirs(photo_dir, exist_ok=True)

    file_name = f"{day.isoformat()}_{angle}.jpg"
    thumbnail_name = f"{day.isoformat()}_{angle}_thumb.jpg"
    upload.save(os.path.join(photo_dir, file_name))
    # Thumbnails are a straight copy until resizing is added
    shutil.copyfile(os.path.join(photo_dir, file_name), os.path.join(photo_dir, thumbnail_name))
    return f"/photos/{file_name}", f"/photos/{thumbnail_name}"


@app.route("/api/checkins", methods=["POST"])
@api_errors("Failed to process checkin")
def checkin_action():
    today = get_today()

    if request.mimetype == "multipart/form-data":
        upload = request.files.get("photo")
        angle = request.form.get("angle")
        if upload is None or not angle:
            return jsonify({"error": "Photo and angle required"}), 400
        if angle not in PHOTO_ANGLES:
            raise ValueError(f"angle must be one of {', '.join(PHOTO_ANGLES)}")

        day = _date_arg(request.form.get("date"), today)
        checkin = queries.get_or_create_checkin(day)
        file_path, thumbnail_path = _save_photo(upload, day, angle)
        photo = queries.create_progress_photo(checkin, angle, file_path, thumbnail_path)
        db.session.commit()
        return jsonify({"success": True, "photo": photo.to_dict()})

    body = _json_body()
    if body.get("action") != "log_weight":
        return jsonify({"error": "Invalid action"}), 400

    weight = _require_number(body, "weight")
    day = _date_arg(body.get("date"), today)
    row = queries.get_settings_row(today)
    checkin = queries.log_weight(row, day, weight, body.get("notes"))
    db.session.commit()
    return jsonify({"success": True, "checkin": checkin.to_dict()})


@app.route("/photos/<path:filename>")
def photo_file(filename):
    return send_from_directory(app.config["PHOTO_DIR"], filename)


# --- Measurements ---

@app.route("/api/measurements")
@api_errors("Failed to fetch measurements")
def measurements():
    history = queries.get_recent_measurements(30)
    first = queries.get_first_measurements()
    latest = history[0] if history else None
    return jsonify({
        "history": history,
        "first": first,
        "latest": latest,
        "changes": measurement_changes(first, latest),
    })


@app.route("/api/measurements", methods=["POST"])
@api_errors("Failed to log measurements")
def measurements_log():
    body = _json_body()
    values = {key: _optional_number(body, key) for key in queries.MEASUREMENT_COLUMNS}
    if not any(values.values()):
        raise ValueError("At least one measurement is required")
    day = _date_arg(body.get("date"), get_today())
    checkin = queries.log_body_measurements(day, values)
    db.session.commit()
    return jsonify({"success": True, "measurements": checkin.measurements()})


# --- Progress ---

@app.route("/api/progress")
@api_errors("Failed to fetch progress data")
def progress():
    today = get_today()
    _, settings = _load_settings(today)
    kind = request.args.get("type")

    if kind == "strength":
        entries = []
        for entry in queries.get_strength_progress():
            name = entry["exercise_name"]
            entry["standards"] = get_strength_standards_for_weight(name, settings.current_weight)
            entry["level"] = get_strength_level(name, entry["one_rep_max"] or 0, settings.current_weight)
            entries.append(entry)
        return jsonify({"progress": entries, "bodyweight": settings.current_weight})

    if kind == "volume":
        sessions = queries.get_volume_history(60, today)
        return jsonify({"sessions": sessions, "weekly_totals": weekly_volume_totals(sessions)})

    if kind == "nutrition":
        history = [n.to_dict() for n in queries.get_nutrition_history(30, today)]
        summary = summarize_nutrition_history(history)
        return jsonify({"history": history, **summary})

    if kind == "photos":
        return jsonify({angle: queries.get_comparison_photos(angle) for angle in PHOTO_ANGLES})

    if kind == "measurements":
        history = queries.get_recent_measurements(30)
        return jsonify({
            "history": history,
            "first": queries.get_first_measurements(),
            "latest": history[0] if history else None,
        })

    if kind == "goal":
        observation, trend = _observation(settings, today)
        weekly_rate = trend["weekly_change"] if trend else 0
        target_weight = get_phase_target_weight(settings.current_phase.value)
        goal = calculate_goal_date(settings.current_weight, target_weight, weekly_rate, today)
        phase_progress = get_phase_progress(settings, observation) or {}
        return jsonify({
            "current_weight": settings.current_weight,
            "target_weight": target_weight,
            "weekly_rate": weekly_rate,
            "goal_date": goal["date"].isoformat() if goal else None,
            "weeks_remaining": goal["weeks_remaining"] if goal else None,
            "phase": settings.current_phase.value,
            "phase_progress": phase_progress.get("weight_progress", 0),
            "phase_message": phase_progress.get("message", ""),
            "weeks_in_phase": phase_progress.get("weeks_in_phase", 0),
            "on_track": phase_progress.get("on_track", True),
        })

    strength = queries.get_strength_progress()
    return jsonify({
        "week_number": get_current_week_number(settings.program_start_date, today),
        "is_deload": is_deload_week(settings.program_start_date, today),
        "weight_trend": _compute("weight trend", calculate_weight_trend, queries.get_recent_weights(14)),
        "strength_progress": strength[:5],
        "settings": _settings_payload(settings),
    })


# --- Settings ---

@app.route("/api/settings")
@api_errors("Failed to fetch settings")
def settings_view():
    today = get_today()
    _, settings = _load_settings(today)
    observation, _ = _observation(settings, today)
    payload = _settings_payload(settings)
    payload["phase_config"] = get_phase_config(settings.current_phase.value)
    payload["phase_progress"] = _compute("phase progress", get_phase_progress, settings, observation)
    return jsonify(payload)


def _clock(value):
    parse_clock(value)
    return value


SETTINGS_PARSERS = {
    "height_inches": int,
    "current_weight": float,
    "target_weight": float,
    "current_phase": PhaseState,
    "wake_time": _clock,
    "workout_time": _clock,
    "workout_time_weekend": _clock,
    "program_start_date": parse_date,
    "phase_start_date": parse_date,
}


@app.route("/api/settings", methods=["PATCH"])
@api_errors("Failed to update settings")
def settings_update():
    body = _json_body()
    today = get_today()
    row, settings = _load_settings(today)

    changes = {}
    for key, value in body.items():
        parser = SETTINGS_PARSERS.get(key)
        if parser is None:
            continue
        try:
            changes[key] = parser(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid value for {key}: {value!r}") from None

    # A hand-picked phase starts its clock today unless a start date is given
    phase = changes.get("current_phase")
    if phase is not None and phase != settings.current_phase and "phase_start_date" not in changes:
        changes["phase_start_date"] = today

    settings = replace(settings, **changes)
    queries.save_settings(row, settings)
    db.session.commit()
    return jsonify(_settings_payload(settings))


# --- Reset and export ---

@app.route("/api/reset", methods=["POST"])
@api_errors("Failed to reset data")
def reset():
    today = get_today()
    queries.delete_all_logs()
    queries.reset_settings(queries.get_settings_row(today), today)
    db.session.commit()

    photo_dir = app.config["PHOTO_DIR"]
    if os.path.isdir(photo_dir):
        for name in os.listdir(photo_dir):
            if name != ".gitkeep":
                os.remove(os.path.join(photo_dir, name))

    logger.info(f"All data reset; program restarts on {today.isoformat()}")

    return jsonify({"success": True, "message": "All data has been reset"})


@app.route("/api/export")
@api_errors("Failed to export data")
def export_download():
    from export import generate_xlsx
    output = generate_xlsx()
    return send_file(
        output,
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        as_attachment=True,
        download_name=f"ascend_log_{get_today().isoformat()}.xlsx",
    )


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
