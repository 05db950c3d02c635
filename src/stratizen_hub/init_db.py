"""Create the schema and seed the rank table."""

from stratizen_hub.db.session import SessionLocal, create_tables
from stratizen_hub.services.points import seed_ranks


def init_db() -> int:
    """Initialize the database by creating all tables and seeding ranks."""
    create_tables()
    with SessionLocal() as db:
        return seed_ranks(db)


if __name__ == "__main__":
    inserted = init_db()
    print(f"Database initialized ({inserted} rank tiers seeded).")
