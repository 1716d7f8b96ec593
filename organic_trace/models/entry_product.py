from sqlalchemy import Column, Float, Index, String

from organic_trace.database.base import Base
from organic_trace.models._columns import created_at_column, id_column


class EntryProduct(Base):
    __tablename__ = "entry_products"

    id = id_column()
    user_id = Column(String(36), nullable=False)
    product_id = Column(String(36), nullable=False)
    quantity = Column(Float, nullable=False)
    batch_number = Column(String(50), nullable=False)
    received_from = Column(String(36))
    notes = Column(String(500))
    created_at = created_at_column()

    __table_args__ = (
        Index("idx_entry_products_user", "user_id", "created_at"),
        Index("idx_entry_products_batch", "batch_number"),
    )


__all__ = ["EntryProduct"]
