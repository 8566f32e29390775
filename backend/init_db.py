"""
Database initialization script
Run this to create the attendance tables
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from punch_api.core.config import settings
from punch_api.core.database import Base, create_db_engine
from punch_api.models import Employee, AttendanceRecord  # noqa: F401  register tables


def init_db(url: str = None):
    """Initialize database with tables"""
    engine = create_db_engine(url or settings.DATABASE_URL)
    try:
        print("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        print("✓ Tables created: " + ", ".join(sorted(Base.metadata.tables)))
    finally:
        engine.dispose()


if __name__ == "__main__":
    print("=" * 60)
    print(f"{settings.APP_NAME} - Database Initialization")
    print("=" * 60)

    init_db(sys.argv[1] if len(sys.argv) > 1 else None)

    print("\n" + "=" * 60)
    print("Initialization complete!")
    print("=" * 60)
    print("\nYou can now start the API:")
    print("  uvicorn punch_api.main:app --port 8000")
    print("  - API Docs: http://localhost:8000/docs")
    print("=" * 60)
