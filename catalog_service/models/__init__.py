"""
SQLAlchemy models
"""
from catalog_service.models.translation import Translation, Tag, tag_translation

__all__ = [
    "Translation",
    "Tag",
    "tag_translation",
]

# Import Base for Alembic
from catalog_service.core.database import Base
