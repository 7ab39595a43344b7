"""Static program definitions: the 7-day training cycle, meal templates and phases.

These are versioned with the code and never edited at runtime. Everything that
reads them treats the structures as read-only.
"""

WORKOUT_PROGRAM = {
    "program": {
        "name": "Ascend Recomp",
        "days_per_cycle": 7,
        "description": "Push/pull/legs split run twice per cycle with a single rest day",
    },
    "schedule": [
        {
            "day": 1,
            "name": "Push (Heavy)",
            "focus": "Chest, shoulders and triceps strength",
            "muscles": ["chest", "shoulders", "triceps"],
            "estimated_duration_minutes": 65,
            "exercises": [
                {"name": "Barbell Bench Press", "sets": 4, "reps": "5-6", "rest_seconds": 180,
                 "type": "compound", "progression": "heavy", "muscle_group": "chest",
                 "form_cues": ["Retract shoulder blades", "Feet planted, slight arch", "Touch mid-chest"]},
                {"name": "Overhead Press", "sets": 3, "reps": "6-8", "rest_seconds": 150,
                 "type": "compound", "progression": "heavy", "muscle_group": "shoulders",
                 "form_cues": ["Brace glutes and core", "Bar path straight up", "Head through at lockout"]},
                {"name": "Incline Dumbbell Press", "sets": 3, "reps": "8-10", "rest_seconds": 120,
                 "type": "compound", "progression": "moderate", "muscle_group": "chest",
                 "form_cues": ["30 degree bench", "Elbows at 45 degrees"]},
                {"name": "Lateral Raise", "sets": 3, "reps": "12-15", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "shoulders",
                 "form_cues": ["Lead with elbows", "Stop at shoulder height"]},
                {"name": "Tricep Pushdown", "sets": 3, "reps": "10-12", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "triceps",
                 "form_cues": ["Elbows pinned to sides", "Full lockout"]},
            ],
        },
        {
            "day": 2,
            "name": "Pull (Heavy)",
            "focus": "Back thickness and biceps",
            "muscles": ["back", "biceps", "rear delts"],
            "estimated_duration_minutes": 65,
            "exercises": [
                {"name": "Deadlift", "sets": 3, "reps": "4-6", "rest_seconds": 180,
                 "type": "compound", "progression": "heavy", "muscle_group": "back",
                 "form_cues": ["Bar over mid-foot", "Flat back, hinge at hips", "Push the floor away"]},
                {"name": "Pull-ups", "sets": 3, "reps": "6-10", "rest_seconds": 120,
                 "type": "compound", "progression": "moderate", "muscle_group": "back",
                 "form_cues": ["Full dead hang", "Chin over bar"]},
                {"name": "Barbell Row", "sets": 3, "reps": "6-8", "rest_seconds": 120,
                 "type": "compound", "progression": "heavy", "muscle_group": "back",
                 "form_cues": ["Torso near parallel", "Pull to lower ribs"]},
                {"name": "Face Pull", "sets": 3, "reps": "15-20", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "rear delts",
                 "form_cues": ["Pull to forehead", "Externally rotate at the end"]},
                {"name": "Barbell Curl", "sets": 3, "reps": "8-10", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "biceps",
                 "form_cues": ["No swinging", "Squeeze at the top"]},
            ],
        },
        {
            "day": 3,
            "name": "Legs (Heavy)",
            "focus": "Squat strength and posterior chain",
            "muscles": ["quads", "hamstrings", "glutes", "calves"],
            "estimated_duration_minutes": 70,
            "exercises": [
                {"name": "Barbell Squat", "sets": 4, "reps": "5-6", "rest_seconds": 180,
                 "type": "compound", "progression": "heavy", "muscle_group": "quads",
                 "form_cues": ["Knees track over toes", "Break parallel", "Chest up"]},
                {"name": "Romanian Deadlift", "sets": 3, "reps": "8-10", "rest_seconds": 120,
                 "type": "compound", "progression": "moderate", "muscle_group": "hamstrings",
                 "form_cues": ["Soft knees", "Push hips back", "Bar close to legs"]},
                {"name": "Leg Press", "sets": 3, "reps": "10-12", "rest_seconds": 120,
                 "type": "compound", "progression": "moderate", "muscle_group": "quads",
                 "form_cues": ["Lower back on the pad", "Do not lock knees"]},
                {"name": "Standing Calf Raise", "sets": 4, "reps": "12-15", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "calves",
                 "form_cues": ["Full stretch at the bottom", "Pause at the top"]},
            ],
        },
        {
            "day": 4,
            "name": "Push (Volume)",
            "focus": "Chest and shoulder hypertrophy",
            "muscles": ["chest", "shoulders", "triceps"],
            "estimated_duration_minutes": 60,
            "exercises": [
                {"name": "Incline Barbell Press", "sets": 4, "reps": "8-10", "rest_seconds": 120,
                 "type": "compound", "progression": "moderate", "muscle_group": "chest",
                 "form_cues": ["Shoulder blades pinned", "Touch upper chest"]},
                {"name": "Seated Dumbbell Press", "sets": 3, "reps": "8-12", "rest_seconds": 90,
                 "type": "compound", "progression": "moderate", "muscle_group": "shoulders",
                 "form_cues": ["Back against the pad", "Press slightly inward"]},
                {"name": "Cable Fly", "sets": 3, "reps": "12-15", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "chest",
                 "form_cues": ["Slight elbow bend", "Hug the tree"]},
                {"name": "Lateral Raise", "sets": 4, "reps": "12-15", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "shoulders",
                 "form_cues": ["Lead with elbows", "Stop at shoulder height"]},
                {"name": "Overhead Tricep Extension", "sets": 3, "reps": "10-12", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "triceps",
                 "form_cues": ["Elbows forward", "Deep stretch"]},
            ],
        },
        {
            "day": 5,
            "name": "Pull (Volume)",
            "focus": "Back width and arms",
            "muscles": ["back", "biceps", "rear delts"],
            "estimated_duration_minutes": 60,
            "exercises": [
                {"name": "Lat Pulldown", "sets": 4, "reps": "10-12", "rest_seconds": 90,
                 "type": "compound", "progression": "moderate", "muscle_group": "back",
                 "form_cues": ["Pull to upper chest", "Drive elbows down"]},
                {"name": "Seated Cable Row", "sets": 3, "reps": "10-12", "rest_seconds": 90,
                 "type": "compound", "progression": "moderate", "muscle_group": "back",
                 "form_cues": ["Tall chest", "Squeeze shoulder blades"]},
                {"name": "Rear Delt Fly", "sets": 3, "reps": "15-20", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "rear delts",
                 "form_cues": ["Pinkies up", "Control the negative"]},
                {"name": "Hammer Curl", "sets": 3, "reps": "10-12", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "biceps",
                 "form_cues": ["Neutral grip", "Elbows still"]},
            ],
        },
        {
            "day": 6,
            "name": "Legs (Volume)",
            "focus": "Quad and glute hypertrophy",
            "muscles": ["quads", "hamstrings", "glutes", "calves"],
            "estimated_duration_minutes": 65,
            "exercises": [
                {"name": "Front Squat", "sets": 3, "reps": "8-10", "rest_seconds": 150,
                 "type": "compound", "progression": "moderate", "muscle_group": "quads",
                 "form_cues": ["Elbows high", "Upright torso"]},
                {"name": "Bulgarian Split Squat", "sets": 3, "reps": "10-12", "rest_seconds": 90,
                 "type": "compound", "progression": "moderate", "muscle_group": "quads",
                 "form_cues": ["Front shin vertical", "Control the descent"]},
                {"name": "Lying Leg Curl", "sets": 3, "reps": "10-12", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "hamstrings",
                 "form_cues": ["Hips down on the pad", "Slow negative"]},
                {"name": "Seated Calf Raise", "sets": 4, "reps": "15-20", "rest_seconds": 60,
                 "type": "isolation", "progression": "light", "muscle_group": "calves",
                 "form_cues": ["Full range", "Pause at the bottom"]},
            ],
        },
        {
            "day": 7,
            "name": "Rest",
            "focus": "Recovery",
            "muscles": [],
            "estimated_duration_minutes": 0,
            "exercises": [],
        },
    ],
}


FOOD_DATABASE = {
    "oats": {"name": "Rolled oats", "serving_size_g": 80, "calories": 300, "protein_g": 10, "carbs_g": 54, "fats_g": 5},
    "whey": {"name": "Whey protein", "serving_size_g": 30, "calories": 120, "protein_g": 24, "carbs_g": 3, "fats_g": 2},
    "banana": {"name": "Banana", "serving_size_g": 120, "serving_unit": "medium", "calories": 105, "protein_g": 1, "carbs_g": 27, "fats_g": 0},
    "eggs": {"name": "Whole eggs", "serving_size_g": 50, "serving_unit": "large", "calories": 70, "protein_g": 6, "carbs_g": 0, "fats_g": 5},
    "rice": {"name": "White rice (cooked)", "serving_size_g": 200, "calories": 260, "protein_g": 5, "carbs_g": 57, "fats_g": 1},
    "chicken": {"name": "Chicken breast", "serving_size_g": 170, "calories": 280, "protein_g": 53, "carbs_g": 0, "fats_g": 6},
    "greek_yogurt": {"name": "Greek yogurt", "serving_size_g": 200, "calories": 150, "protein_g": 20, "carbs_g": 8, "fats_g": 4},
    "almonds": {"name": "Almonds", "serving_size_g": 28, "calories": 165, "protein_g": 6, "carbs_g": 6, "fats_g": 14},
    "salmon": {"name": "Salmon fillet", "serving_size_g": 170, "calories": 350, "protein_g": 38, "carbs_g": 0, "fats_g": 21},
    "potato": {"name": "Potato", "serving_size_g": 300, "calories": 230, "protein_g": 6, "carbs_g": 51, "fats_g": 0},
    "cottage_cheese": {"name": "Cottage cheese", "serving_size_g": 226, "calories": 200, "protein_g": 28, "carbs_g": 8, "fats_g": 5},
    "bagel": {"name": "Bagel", "serving_size_g": 105, "serving_unit": "bagel", "calories": 280, "protein_g": 10, "carbs_g": 55, "fats_g": 2},
    "beef": {"name": "Lean ground beef", "serving_size_g": 170, "calories": 360, "protein_g": 44, "carbs_g": 0, "fats_g": 20},
}


MEAL_PLAN = {
    "meta": {
        "version": "1.2",
        "created": "2025-01-06",
        "phase": "bulk",
        "daily_targets": {"calories": 2900, "protein_g": 185, "carbs_g": 350, "fats_g": 80},
    },
    "food_database": FOOD_DATABASE,
    "schedules": {
        "weekday": {
            "name": "Weekday (early training)",
            "days": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
            "notes": "Training shortly after waking, so breakfast doubles as the pre-workout meal",
            "meals": [
                {"meal_number": 1, "name": "Pre-Workout Breakfast", "time": "06:15",
                 "foods": [{"food_id": "oats", "quantity": 1, "display": "80g rolled oats"},
                           {"food_id": "banana", "quantity": 1, "display": "1 banana"}],
                 "macros": {"calories": 405, "protein": 11, "carbs": 81, "fats": 5}},
                {"meal_number": 2, "name": "Post-Workout", "time": "08:30",
                 "foods": [{"food_id": "whey", "quantity": 1.5, "display": "1.5 scoops whey"},
                           {"food_id": "bagel", "quantity": 1, "display": "1 bagel"}],
                 "macros": {"calories": 460, "protein": 46, "carbs": 60, "fats": 5}},
                {"meal_number": 3, "name": "Lunch", "time": "11:30",
                 "foods": [{"food_id": "chicken", "quantity": 1, "display": "170g chicken breast"},
                           {"food_id": "rice", "quantity": 1.5, "display": "300g cooked rice"}],
                 "macros": {"calories": 670, "protein": 61, "carbs": 86, "fats": 8}},
                {"meal_number": 4, "name": "Afternoon Snack", "time": "14:30",
                 "foods": [{"food_id": "greek_yogurt", "quantity": 1, "display": "200g Greek yogurt"},
                           {"food_id": "almonds", "quantity": 1, "display": "28g almonds"}],
                 "macros": {"calories": 315, "protein": 26, "carbs": 14, "fats": 18}},
                {"meal_number": 5, "name": "Dinner", "time": "17:30",
                 "foods": [{"food_id": "salmon", "quantity": 1, "display": "170g salmon"},
                           {"food_id": "potato", "quantity": 1.5, "display": "450g potato"}],
                 "macros": {"calories": 695, "protein": 47, "carbs": 77, "fats": 21}},
                {"meal_number": 6, "name": "Before Bed", "time": "20:00",
                 "foods": [{"food_id": "cottage_cheese", "quantity": 1, "display": "1 cup cottage cheese"},
                           {"food_id": "oats", "quantity": 0.5, "display": "40g rolled oats"}],
                 "macros": {"calories": 350, "protein": 33, "carbs": 35, "fats": 8}},
            ],
        },
        "weekend": {
            "name": "Weekend (late training)",
            "days": ["Saturday", "Sunday"],
            "notes": "Training later in the morning leaves room for a separate breakfast",
            "meals": [
                {"meal_number": 1, "name": "Breakfast", "time": "06:30",
                 "foods": [{"food_id": "eggs", "quantity": 3, "display": "3 whole eggs"},
                           {"food_id": "bagel", "quantity": 1, "display": "1 bagel"}],
                 "macros": {"calories": 490, "protein": 28, "carbs": 55, "fats": 17}},
                {"meal_number": 2, "name": "Pre-Workout", "time": "07:45",
                 "foods": [{"food_id": "banana", "quantity": 1, "display": "1 banana"},
                           {"food_id": "greek_yogurt", "quantity": 1, "display": "200g Greek yogurt"}],
                 "macros": {"calories": 255, "protein": 21, "carbs": 35, "fats": 4}},
                {"meal_number": 3, "name": "Post-Workout", "time": "10:30",
                 "foods": [{"food_id": "whey", "quantity": 1.5, "display": "1.5 scoops whey"},
                           {"food_id": "oats", "quantity": 1, "display": "80g rolled oats"}],
                 "macros": {"calories": 480, "protein": 46, "carbs": 58, "fats": 8}},
                {"meal_number": 4, "name": "Lunch", "time": "13:30",
                 "foods": [{"food_id": "beef", "quantity": 1, "display": "170g lean ground beef"},
                           {"food_id": "rice", "quantity": 1.5, "display": "300g cooked rice"}],
                 "macros": {"calories": 750, "protein": 52, "carbs": 86, "fats": 22}},
                {"meal_number": 5, "name": "Snack", "time": "16:30",
                 "foods": [{"food_id": "cottage_cheese", "quantity": 1, "display": "1 cup cottage cheese"},
                           {"food_id": "almonds", "quantity": 0.5, "display": "14g almonds"}],
                 "macros": {"calories": 283, "protein": 31, "carbs": 11, "fats": 12}},
                {"meal_number": 6, "name": "Dinner", "time": "19:30",
                 "foods": [{"food_id": "chicken", "quantity": 1, "display": "170g chicken breast"},
                           {"food_id": "potato", "quantity": 1.5, "display": "450g potato"}],
                 "macros": {"calories": 625, "protein": 62, "carbs": 77, "fats": 6}},
            ],
        },
    },
}


PHASES = [
    {
        "id": "bulk",
        "name": "Lean Bulk",
        "order": 1,
        "targets": {
            "start_weight": 184, "goal_weight_min": 192, "goal_weight_max": 195,
            "calories": 2900, "protein": 185, "carbs": 350, "fats": 80,
            "weekly_rate": 0.5,
        },
        "duration": {"min_weeks": 12, "max_weeks": 20},
        "transition": {"trigger": "weight_reached", "next_phase": "cut"},
        "description": "Slow surplus to add muscle while keeping fat gain in check",
    },
    {
        "id": "cut",
        "name": "Cut",
        "order": 2,
        "targets": {
            "start_weight": 192, "goal_weight_min": 176, "goal_weight_max": 180,
            "calories": 2300, "protein": 200, "carbs": 200, "fats": 65,
            "weekly_rate": -1.5,
        },
        "duration": {"min_weeks": 8, "max_weeks": 12},
        "transition": {"trigger": "weight_reached", "next_phase": "maintain"},
        "description": "Aggressive deficit with high protein to keep the muscle from the bulk",
    },
    {
        "id": "maintain",
        "name": "Maintenance",
        "order": 3,
        "targets": {
            "start_weight": 178, "goal_weight_min": 176, "goal_weight_max": 180,
            "calories": 2600, "protein": 180, "carbs": 310, "fats": 70,
            "weekly_rate": 0,
        },
        "duration": {"min_weeks": 4, "max_weeks": 8},
        "transition": {"trigger": "duration_reached", "next_phase": "complete"},
        "description": "Hold the new bodyweight and let it settle",
    },
]

FINAL_TARGET = {"weight": 178, "description": "Lean at 178 lbs"}


def get_workout_day(day):
    """Return the schedule entry for a program day (1-7), or None."""
    for workout in WORKOUT_PROGRAM["schedule"]:
        if workout["day"] == day:
            return workout
    return None


def find_workout_by_name(name):
    for workout in WORKOUT_PROGRAM["schedule"]:
        if workout["name"] == name:
            return workout
    return None


def find_exercise(name):
    """First exercise definition with this name anywhere in the cycle."""
    for workout in WORKOUT_PROGRAM["schedule"]:
        for exercise in workout["exercises"]:
            if exercise["name"] == name:
                return exercise
    return None


def get_all_exercises():
    names = set()
    for workout in WORKOUT_PROGRAM["schedule"]:
        for exercise in workout["exercises"]:
            names.add(exercise["name"])
    return sorted(names)


def get_meal_schedule(is_weekend):
    schedules = MEAL_PLAN["schedules"]
    return schedules["weekend"] if is_weekend else schedules["weekday"]


def get_phase_config(phase_id):
    for phase in PHASES:
        if phase["id"] == phase_id:
            return phase
    return None
