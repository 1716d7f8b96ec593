from sqlalchemy import JSON, Column, Float, Index, String

from organic_trace.database.base import Base
from organic_trace.models._columns import created_at_column, id_column


class SupplyChainEvent(Base):
    __tablename__ = "supply_chain_events"

    id = id_column()
    product_id = Column(String(36))
    batch_number = Column(String(50), nullable=False)
    event_type = Column(String(40), nullable=False)
    from_user = Column(String(36))
    to_user = Column(String(36))
    quantity = Column(Float)
    location = Column(String(200))
    timestamp = created_at_column()
    # "metadata" is reserved on declarative classes.
    event_metadata = Column("metadata", JSON, nullable=False, default=dict)

    __table_args__ = (
        Index("idx_events_product_time", "product_id", "timestamp"),
        Index("idx_events_batch", "batch_number"),
    )


__all__ = ["SupplyChainEvent"]
