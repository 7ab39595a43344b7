import io
from openpyxl import Workbook
from models import WorkoutSession, DailyCheckin, DailyNutrition


def _write_sheet(ws, headers, rows):
    ws.append(headers)
    for col in range(1, len(headers) + 1):
        ws.cell(row=1, column=col).font = ws.cell(row=1, column=col).font.copy(bold=True)

    for row in rows:
        ws.append(row)

    # Auto-size columns
    for col in ws.columns:
        max_length = 0
        col_letter = col[0].column_letter
        for cell in col:
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_length + 2, 40)


def _workout_rows():
    sessions = WorkoutSession.query.order_by(WorkoutSession.date.asc()).all()
    for session in sessions:
        for workout_set in sorted(session.sets, key=lambda s: (s.exercise_name, s.set_number)):
            yield [
                session.date.strftime("%Y-%m-%d"),
                session.workout_type,
                workout_set.exercise_name,
                workout_set.set_number,
                workout_set.target_weight,
                workout_set.actual_weight,
                workout_set.target_reps,
                workout_set.actual_reps,
                workout_set.rpe,
                session.notes or "",
            ]


def _checkin_rows():
    for checkin in DailyCheckin.query.order_by(DailyCheckin.date.asc()).all():
        yield [
            checkin.date.strftime("%Y-%m-%d"),
            checkin.morning_weight,
            checkin.waist_measurement,
            checkin.chest_measurement,
            checkin.shoulder_measurement,
            checkin.arm_measurement,
            checkin.thigh_measurement,
            checkin.notes or "",
        ]


def _nutrition_rows():
    for day in DailyNutrition.query.order_by(DailyNutrition.date.asc()).all():
        yield [
            day.date.strftime("%Y-%m-%d"),
            day.target_calories,
            day.actual_calories,
            day.target_protein,
            day.actual_protein,
            day.actual_carbs,
            day.actual_fats,
            day.compliance_percentage,
        ]


def generate_xlsx():
    wb = Workbook()

    ws = wb.active
    ws.title = "Workout Log"
    _write_sheet(
        ws,
        ["Date", "Workout", "Exercise", "Set", "Target (lbs)", "Weight (lbs)", "Target Reps", "Reps", "RPE", "Notes"],
        _workout_rows(),
    )

    _write_sheet(
        wb.create_sheet("Check-ins"),
        ["Date", "Weight (lbs)", "Waist", "Chest", "Shoulders", "Arms", "Thighs", "Notes"],
        _checkin_rows(),
    )

    _write_sheet(
        wb.create_sheet("Nutrition"),
        ["Date", "Target kcal", "kcal", "Target Protein", "Protein", "Carbs", "Fats", "Compliance %"],
        _nutrition_rows(),
    )

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output
