import sys

from mfg_dashboard.core.config import settings
from mfg_dashboard.database import engine, Base
from mfg_dashboard.seed.seed_demo import seed_demo_data


def main():
    print("WARNING: This script will seed the database with demo data.")
    print(f"Target Environment: {settings.environment}")
    print(f"Database: {settings.database_url.split('@')[-1]}")

    confirm = input("Are you sure you want to proceed? (yes/no): ")
    if confirm.lower() != "yes":
        print("Aborted.")
        return

    try:
        print("Ensuring tables exist...")
        Base.metadata.create_all(bind=engine)
        print("Seeding demo data...")
        seed_demo_data()
        print("Seeding completed successfully.")
    except Exception as e:
        print(f"Seeding failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
