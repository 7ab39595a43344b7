from flask_sqlalchemy import SQLAlchemy
from datetime import datetime, date, timezone

db = SQLAlchemy()


def _iso(value):
    return value.isoformat() if value else None


class UserSettings(db.Model):
    __tablename__ = "user_settings"
    id = db.Column(db.Integer, primary_key=True)
    height_inches = db.Column(db.Integer, nullable=False, default=72)
    current_weight = db.Column(db.Float, nullable=False, default=184)
    target_weight = db.Column(db.Float, nullable=False, default=178)
    current_phase = db.Column(db.String(20), nullable=False, default="bulk")  # bulk, cut, maintain, complete
    wake_time = db.Column(db.String(5), nullable=False, default="06:00")
    workout_time = db.Column(db.String(5), nullable=False, default="07:00")
    workout_time_weekend = db.Column(db.String(5), nullable=False, default="09:00")
    program_start_date = db.Column(db.Date, nullable=False, default=date.today)
    phase_start_date = db.Column(db.Date, nullable=False, default=date.today)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class ExerciseMax(db.Model):
    __tablename__ = "exercise_maxes"
    id = db.Column(db.Integer, primary_key=True)
    exercise_name = db.Column(db.String(200), unique=True, nullable=False)
    one_rep_max = db.Column(db.Float)
    last_working_weight = db.Column(db.Float)
    last_reps_achieved = db.Column(db.Integer)
    last_rpe = db.Column(db.Integer)
    last_session_date = db.Column(db.Date)
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    def to_dict(self):
        return {
            "exercise_name": self.exercise_name,
            "one_rep_max": self.one_rep_max,
            "last_working_weight": self.last_working_weight,
            "last_reps_achieved": self.last_reps_achieved,
            "last_rpe": self.last_rpe,
            "last_session_date": _iso(self.last_session_date),
        }


class WorkoutSession(db.Model):
    __tablename__ = "workout_sessions"
    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False, index=True)
    workout_type = db.Column(db.String(100), nullable=False)
    program_day = db.Column(db.Integer, nullable=False)
    started_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    completed_at = db.Column(db.DateTime)
    total_duration_minutes = db.Column(db.Integer)
    notes = db.Column(db.Text)

    sets = db.relationship("WorkoutSet", backref="session", cascade="all, delete-orphan", order_by="WorkoutSet.id")

    def to_dict(self):
        return {
            "id": self.id,
            "date": _iso(self.date),
            "workout_type": self.workout_type,
            "program_day": self.program_day,
            "started_at": _iso(self.started_at),
            "completed_at": _iso(self.completed_at),
            "total_duration_minutes": self.total_duration_minutes,
            "notes": self.notes,
        }


class WorkoutSet(db.Model):
    __tablename__ = "workout_sets"
    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.Integer, db.ForeignKey("workout_sessions.id"), nullable=False, index=True)
    exercise_name = db.Column(db.String(200), nullable=False)
    set_number = db.Column(db.Integer, nullable=False)
    target_reps = db.Column(db.Integer, nullable=False)
    actual_reps = db.Column(db.Integer)
    target_weight = db.Column(db.Float, nullable=False)
    actual_weight = db.Column(db.Float)
    rpe = db.Column(db.Integer)
    rest_duration_seconds = db.Column(db.Integer)
    completed_at = db.Column(db.DateTime)

    __table_args__ = (db.CheckConstraint("rpe IS NULL OR (rpe >= 1 AND rpe <= 10)", name="ck_workout_sets_rpe"),)

    def to_dict(self):
        return {
            "id": self.id,
            "session_id": self.session_id,
            "exercise_name": self.exercise_name,
            "set_number": self.set_number,
            "target_reps": self.target_reps,
            "actual_reps": self.actual_reps,
            "target_weight": self.target_weight,
            "actual_weight": self.actual_weight,
            "rpe": self.rpe,
            "rest_duration_seconds": self.rest_duration_seconds,
            "completed_at": _iso(self.completed_at),
        }


class DailyNutrition(db.Model):
    __tablename__ = "daily_nutrition"
    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, unique=True, nullable=False)
    target_calories = db.Column(db.Integer, nullable=False)
    actual_calories = db.Column(db.Integer, nullable=False, default=0)
    target_protein = db.Column(db.Integer, nullable=False)
    actual_protein = db.Column(db.Integer, nullable=False, default=0)
    target_carbs = db.Column(db.Integer, nullable=False)
    actual_carbs = db.Column(db.Integer, nullable=False, default=0)
    target_fats = db.Column(db.Integer, nullable=False)
    actual_fats = db.Column(db.Integer, nullable=False, default=0)
    compliance_percentage = db.Column(db.Float, nullable=False, default=0)

    meals = db.relationship("Meal", backref="nutrition", cascade="all, delete-orphan", order_by="Meal.meal_number")

    def to_dict(self):
        return {
            "id": self.id,
            "date": _iso(self.date),
            "target_calories": self.target_calories,
            "actual_calories": self.actual_calories or 0,
            "target_protein": self.target_protein,
            "actual_protein": self.actual_protein or 0,
            "target_carbs": self.target_carbs,
            "actual_carbs": self.actual_carbs or 0,
            "target_fats": self.target_fats,
            "actual_fats": self.actual_fats or 0,
            "compliance_percentage": self.compliance_percentage or 0,
        }


class Meal(db.Model):
    __tablename__ = "meals"
    id = db.Column(db.Integer, primary_key=True)
    nutrition_id = db.Column(db.Integer, db.ForeignKey("daily_nutrition.id"), nullable=False, index=True)
    meal_number = db.Column(db.Integer, nullable=False)
    meal_name = db.Column(db.String(100), nullable=False)
    scheduled_time = db.Column(db.String(5), nullable=False)
    logged_at = db.Column(db.DateTime)
    was_eaten = db.Column(db.Boolean, nullable=False, default=False)
    calories = db.Column(db.Integer, nullable=False)
    protein = db.Column(db.Integer, nullable=False)
    carbs = db.Column(db.Integer, nullable=False)
    fats = db.Column(db.Integer, nullable=False)
    notes = db.Column(db.Text)

    def to_dict(self):
        return {
            "id": self.id,
            "nutrition_id": self.nutrition_id,
            "meal_number": self.meal_number,
            "meal_name": self.meal_name,
            "scheduled_time": self.scheduled_time,
            "logged_at": _iso(self.logged_at),
            "was_eaten": self.was_eaten,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fats": self.fats,
            "notes": self.notes,
        }


class DailyCheckin(db.Model):
    __tablename__ = "daily_checkins"
    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, unique=True, nullable=False)
    morning_weight = db.Column(db.Float)
    waist_measurement = db.Column(db.Float)
    chest_measurement = db.Column(db.Float)
    shoulder_measurement = db.Column(db.Float)
    arm_measurement = db.Column(db.Float)
    thigh_measurement = db.Column(db.Float)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    photos = db.relationship("ProgressPhoto", backref="checkin", cascade="all, delete-orphan")

    def measurements(self):
        return {
            "date": _iso(self.date),
            "waist": self.waist_measurement,
            "chest": self.chest_measurement,
            "shoulders": self.shoulder_measurement,
            "arms": self.arm_measurement,
            "thighs": self.thigh_measurement,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "date": _iso(self.date),
            "morning_weight": self.morning_weight,
            "waist_measurement": self.waist_measurement,
            "chest_measurement": self.chest_measurement,
            "shoulder_measurement": self.shoulder_measurement,
            "arm_measurement": self.arm_measurement,
            "thigh_measurement": self.thigh_measurement,
            "notes": self.notes,
        }


class ProgressPhoto(db.Model):
    __tablename__ = "progress_photos"
    id = db.Column(db.Integer, primary_key=True)
    checkin_id = db.Column(db.Integer, db.ForeignKey("daily_checkins.id"), nullable=False, index=True)
    angle = db.Column(db.String(10), nullable=False)  # front, side, back
    file_path = db.Column(db.String(300), nullable=False)
    thumbnail_path = db.Column(db.String(300), nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    def to_dict(self):
        return {
            "id": self.id,
            "checkin_id": self.checkin_id,
            "angle": self.angle,
            "file_path": self.file_path,
            "thumbnail_path": self.thumbnail_path,
            "date": _iso(self.checkin.date) if self.checkin else None,
        }
