"""
Translation and Tag models
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Table, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from catalog_service.core.database import Base


# Association: no payload beyond the two foreign keys
tag_translation = Table(
    "tag_translation",
    Base.metadata,
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False),
    Column("translation_id", Integer, ForeignKey("translations.id", ondelete="CASCADE"), nullable=False),
    UniqueConstraint("tag_id", "translation_id", name="uq_tag_translation"),
    Index("idx_tag_translation_translation", "translation_id"),
)


class Translation(Base):
    """One text entry for a logical key in one locale"""

    __tablename__ = "translations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(255), nullable=False, index=True)  # welcome.msg, button.start, etc.
    value = Column(Text, nullable=False)
    locale = Column(String(10), nullable=False, index=True)  # en, fr, pt-BR
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    tags = relationship(
        "Tag",
        secondary=tag_translation,
        back_populates="translations",
        order_by="Tag.name",
        lazy="selectin",
    )

    # Unique constraint: one translation per key per locale
    __table_args__ = (
        UniqueConstraint("key", "locale", name="uq_translations_key_locale"),
    )

    @property
    def tag_names(self):
        return [tag.name for tag in self.tags]

    def __repr__(self):
        return f"<Translation(id={self.id}, key={self.key}, locale={self.locale})>"


class Tag(Base):
    """Label attached to translations (mobile, web, admin...)"""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    translations = relationship(
        "Translation",
        secondary=tag_translation,
        back_populates="tags",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Tag(id={self.id}, name={self.name})>"
