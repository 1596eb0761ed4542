import subprocess
import sys
from pathlib import Path

DB_PATH = Path("content_engine.sqlite")


def delete_database():
    if DB_PATH.exists():
        print(f"Deleting existing database: {DB_PATH}")
        DB_PATH.unlink()
    else:
        print("No existing database found. Skipping delete step.")


def run_initialization():
    print("Running database initialization...")
    subprocess.run([sys.executable, "-m", "content_engine.db.init_db", "--reset"], check=True)


def run_seeding():
    print("Running keyword seed script...")
    subprocess.run([sys.executable, "-m", "content_engine.db.seed_keywords"], check=True)


if __name__ == "__main__":
    delete_database()
    run_initialization()
    run_seeding()
    print("✅ Done! Database reset, initialized, and seeded.")
