from sqlalchemy import Column, Float, Index, String

from organic_trace.database.base import Base
from organic_trace.models._columns import created_at_column, id_column


class ExitProduct(Base):
    __tablename__ = "exit_products"

    id = id_column()
    user_id = Column(String(36), nullable=False)
    entry_product_id = Column(String(36), nullable=False)
    quantity = Column(Float, nullable=False)
    assigned_to = Column(String(36))
    notes = Column(String(500))
    created_at = created_at_column()

    __table_args__ = (Index("idx_exit_products_user", "user_id", "created_at"),)


__all__ = ["ExitProduct"]
