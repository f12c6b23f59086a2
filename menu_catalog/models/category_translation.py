from sqlalchemy import Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from menu_catalog.database import Base


class CategoryTranslation(Base):
    __tablename__ = 'category_translations'
    __table_args__ = (
        UniqueConstraint('category_id', 'language_code', name='uq_category_translations_language'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    category_id: Mapped[str] = mapped_column(String(36), ForeignKey('categories.id', ondelete='CASCADE'), nullable=False)
    language_code: Mapped[str] = mapped_column(String(5), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    category = relationship('Category', back_populates='translations')
