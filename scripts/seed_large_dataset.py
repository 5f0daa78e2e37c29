#!/usr/bin/env python3
"""
Seed a large synthetic dataset for performance checks.

Bulk-inserts translations in chunks (bypassing the service for speed),
attaches 1-3 random tags to each, then invalidates the export caches
of every seeded locale.
"""
import random
import sys
import time
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import insert, select

from catalog_service.core.config import settings
from catalog_service.core.database import SessionLocal, engine, Base
from catalog_service.core.redis import build_cache_store
from catalog_service.models.translation import Tag, Translation, tag_translation
from catalog_service.services.export_cache import ExportCacheManager

LOCALES = ["en", "fr", "es", "de", "it", "uk", "pl", "pt-BR"]
TAG_NAMES = ["mobile", "desktop", "web", "admin", "public", "email", "checkout", "onboarding", "errors", "legal"]
WORDS = [
    "welcome", "button", "title", "label", "error", "message", "profile", "settings",
    "cart", "order", "payment", "login", "logout", "search", "help", "footer",
]


def _fake_key(rng: random.Random, index: int) -> str:
    return f"{rng.choice(WORDS)}.{rng.choice(WORDS)}.{index}"


def _fake_value(rng: random.Random) -> str:
    return " ".join(rng.choice(WORDS) for _ in range(rng.randint(2, 8))).capitalize()


def seed(total: int = 100_000, chunk_size: int = 1000, seed_value: int = 42, cache=None):
    rng = random.Random(seed_value)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        existing = set(db.execute(select(Tag.name)).scalars())
        missing = [{"name": name} for name in TAG_NAMES if name not in existing]
        if missing:
            db.execute(insert(Tag), missing)
            db.commit()
        tag_ids = list(db.execute(select(Tag.id).where(Tag.name.in_(TAG_NAMES))).scalars())

        start_id = (db.query(Translation.id).order_by(Translation.id.desc()).limit(1).scalar() or 0) + 1
        started = time.time()
        print("🌱 Seeding translations...")

        for offset in range(0, total, chunk_size):
            rows = [
                {
                    "key": _fake_key(rng, start_id + offset + i),
                    "value": _fake_value(rng),
                    "locale": rng.choice(LOCALES),
                }
                for i in range(min(chunk_size, total - offset))
            ]
            ids = list(db.execute(insert(Translation).returning(Translation.id), rows).scalars())

            pivots = set()
            for translation_id in ids:
                for tag_id in rng.sample(tag_ids, rng.randint(1, 3)):
                    pivots.add((tag_id, translation_id))
            db.execute(
                insert(tag_translation),
                [{"tag_id": t, "translation_id": tr} for t, tr in pivots],
            )
            db.commit()
            print(f"   Seeded {offset + len(rows)} translations")

        cache = cache or build_cache_store(settings.CACHE_BACKEND, settings.REDIS_URL)
        export_cache = ExportCacheManager(db, cache)
        for locale in LOCALES:
            export_cache.invalidate(locale)

        print(f"✅ Seeding complete in {time.time() - started:.1f}s")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Seed synthetic translations")
    parser.add_argument("--count", type=int, default=100_000, help="Number of translations")
    parser.add_argument("--chunk", type=int, default=1000, help="Rows per insert")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    seed(total=args.count, chunk_size=args.chunk, seed_value=args.seed)
