import uuid

from sqlalchemy import Integer, String, Boolean, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from menu_catalog.database import Base


class Category(Base):
    __tablename__ = 'categories'
    __table_args__ = (
        Index('idx_categories_establishment_order', 'establishment_id', 'order_index'),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    establishment_id: Mapped[str] = mapped_column(String(64), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    translations = relationship('CategoryTranslation', back_populates='category', cascade='all, delete-orphan')

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': {translation.language_code: translation.name for translation in self.translations},
            'is_active': self.is_active,
            'order_index': self.order_index
        }
