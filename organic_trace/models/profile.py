from sqlalchemy import Column, String

from organic_trace.database.base import Base
from organic_trace.models._columns import created_at_column


class Profile(Base):
    __tablename__ = "profiles"

    # Shares its value with the auth identity (JWT "sub").
    id = Column(String(36), primary_key=True)
    full_name = Column(String(200), nullable=False)
    address = Column(String(500))
    phone = Column(String(40))
    created_at = created_at_column()


__all__ = ["Profile"]
