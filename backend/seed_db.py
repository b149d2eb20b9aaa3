"""
TalentFlow Database Seeder

Creates the tables and fills an empty database with demo data:
- 3 back-office users (admin, HR, demo)
- 25 jobs across tech and non-tech roles
- 1000 candidates with stage history
- Sample assessments for the first 5 jobs

Running it again against a seeded database does nothing.
"""

import logging
import sys
sys.path.insert(0, ".")

from talentflow.core.config import settings
from talentflow.db.init_db import initialize_database
from talentflow.services.seed import DEMO_USERS


def main():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    seeded = initialize_database()
    if not seeded:
        print("Database already seeded (or seeding failed, see log above). Nothing to do.")
        return

    print("\n📋 Created Users:")
    for user in DEMO_USERS:
        print(f"   - {user['email']} (password: {user['password']}) [{user['role']}]")


if __name__ == "__main__":
    main()
