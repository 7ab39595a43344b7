"""
One-time migration script for Ascend.

Brings a database created by an older build up to the current schema by
adding the columns introduced since. New tables are created by the app on
startup, so only column additions live here.

Usage:
    python migrate.py [path/to/ascend.db]
"""
import sqlite3
import os
import sys

DB_PATH = os.path.join(os.path.dirname(__file__), "instance", "ascend.db")

# (table, column, DDL type)
NEW_COLUMNS = [
    ("user_settings", "workout_time_weekend", "VARCHAR(5) DEFAULT '09:00'"),
    ("user_settings", "phase_start_date", "DATE"),
    ("exercise_maxes", "last_rpe", "INTEGER"),
    ("daily_checkins", "waist_measurement", "FLOAT"),
    ("daily_checkins", "chest_measurement", "FLOAT"),
    ("daily_checkins", "shoulder_measurement", "FLOAT"),
    ("daily_checkins", "arm_measurement", "FLOAT"),
    ("daily_checkins", "thigh_measurement", "FLOAT"),
]


def migrate(db_path=DB_PATH):
    if not os.path.exists(db_path):
        print("No database found. Just run the app and tables will be created automatically.")
        return False

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    def table_exists(table):
        cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,))
        return cursor.fetchone() is not None

    def column_exists(table, column):
        cursor.execute(f"PRAGMA table_info({table})")
        return column in [row[1] for row in cursor.fetchall()]

    print("Running Ascend migration...")

    for table, column, ddl in NEW_COLUMNS:
        if not table_exists(table):
            continue
        if not column_exists(table, column):
            cursor.execute(f"ALTER TABLE {table} ADD COLUMN {column} {ddl}")
            print(f"  Added {table}.{column}")

    # The phase clock starts with the program for rows that predate it
    if table_exists("user_settings"):
        cursor.execute(
            "UPDATE user_settings SET phase_start_date = program_start_date WHERE phase_start_date IS NULL"
        )
        if cursor.rowcount:
            print(f"  Backfilled phase_start_date on {cursor.rowcount} row(s)")

    conn.commit()
    conn.close()
    print("Migration complete!")
    return True


if __name__ == "__main__":
    migrate(sys.argv[1] if len(sys.argv) > 1 else DB_PATH)
