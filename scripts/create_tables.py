#!/usr/bin/env python3
"""
Create catalog database tables.
Used on first run when migrations are not applied.
"""
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from catalog_service.core.database import engine, Base
from catalog_service.models import Translation, Tag, tag_translation  # noqa: F401


def create_tables():
    """Create all tables"""
    print("🔧 Creating database tables...")

    try:
        Base.metadata.create_all(bind=engine)

        print("✅ Tables created successfully!")
        print("\n📋 Tables:")
        for table in Base.metadata.sorted_tables:
            print(f"   - {table.name}")

    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    create_tables()
