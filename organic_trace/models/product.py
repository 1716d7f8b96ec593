from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, String

from organic_trace.database.base import Base
from organic_trace.models._columns import created_at_column, id_column


class Product(Base):
    __tablename__ = "products"

    id = id_column()
    name = Column(String(100), nullable=False)
    description = Column(String(500))
    category = Column(String(50), nullable=False)
    unit = Column(String(20), nullable=False)
    origin = Column(String(100), nullable=False)
    certification = Column(String(100), nullable=False)

    created_by = Column(String(36), nullable=False)
    created_at = created_at_column()
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_products_created_by", "created_by"),
        Index("idx_products_name", "name"),
    )


__all__ = ["Product"]
