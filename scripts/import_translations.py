"""
Import translations from CSV into the catalog.

CSV columns: key, locale, value, tags (tags optional, separated by "|")
Existing (key, locale) rows are updated; new ones are created.
Goes through TranslationService so export caches are invalidated.
"""
import csv
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load .env BEFORE importing anything from the app
from dotenv import load_dotenv

root_env = Path(__file__).parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)
    print(f"✅ Loaded .env from {root_env}")

from catalog_service.core.config import settings
from catalog_service.core.database import SessionLocal, engine, Base
from catalog_service.core.exceptions import CatalogException
from catalog_service.core.redis import build_cache_store
from catalog_service.models.translation import Translation
from catalog_service.services.export_cache import ExportCacheManager
from catalog_service.services.translation_service import TranslationService


def parse_tags(raw: str):
    if raw is None:
        return None
    names = [name.strip() for name in raw.split("|")]
    return [name for name in names if name]


def import_translations(csv_path: str, cache=None) -> dict:
    """
    Import translations from CSV file.

    Returns:
        Counters: created, updated, failed
    """
    Base.metadata.create_all(bind=engine)

    cache = cache or build_cache_store(settings.CACHE_BACKEND, settings.REDIS_URL)
    db = SessionLocal()
    service = TranslationService(db, ExportCacheManager(db, cache))
    counters = {"created": 0, "updated": 0, "failed": 0}

    try:
        with open(csv_path, 'r', encoding='utf-8') as f:
            reader = csv.DictReader(f)

            for line_no, row in enumerate(reader, start=2):
                key = (row.get('key') or '').strip()
                locale = (row.get('locale') or '').strip()
                value = row.get('value') or ''
                tags = parse_tags(row.get('tags'))

                existing = db.query(Translation).filter(
                    Translation.key == key,
                    Translation.locale == locale
                ).first()

                try:
                    if existing:
                        service.update(existing.id, {"value": value}, tag_names=tags)
                        counters["updated"] += 1
                    else:
                        service.create(key, value, locale, tag_names=tags)
                        counters["created"] += 1
                except CatalogException as e:
                    counters["failed"] += 1
                    print(f"❌ Line {line_no} ({key}/{locale}): {e.message} {e.details}")
    finally:
        db.close()

    print(f"✅ Created {counters['created']} translations")
    print(f"⚠️  Updated {counters['updated']} existing translations")
    if counters["failed"]:
        print(f"❌ Failed {counters['failed']} rows")
    return counters


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description='Import translations from CSV')
    parser.add_argument('--csv', required=True, help='Path to translations CSV file')

    args = parser.parse_args()
    csv_path = Path(args.csv)

    if not csv_path.exists():
        print(f"❌ CSV file not found: {csv_path}")
        print("💡 Usage: python scripts/import_translations.py --csv path/to/translations.csv")
        sys.exit(1)

    print(f"📥 Importing translations from {csv_path}")
    result = import_translations(str(csv_path))
    sys.exit(1 if result["failed"] else 0)
