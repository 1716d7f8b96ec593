from sqlalchemy import Column, Float, Index, String

from organic_trace.database.base import Base
from organic_trace.models._columns import created_at_column, id_column


class UsedToday(Base):
    __tablename__ = "used_today"

    id = id_column()
    user_id = Column(String(36), nullable=False)
    entry_product_id = Column(String(36), nullable=False)
    quantity = Column(Float, nullable=False)
    notes = Column(String(500))
    created_at = created_at_column()

    __table_args__ = (Index("idx_used_today_user", "user_id", "created_at"),)


__all__ = ["UsedToday"]
