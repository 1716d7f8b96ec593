from sqlalchemy import CheckConstraint, Column, String, UniqueConstraint

from organic_trace.core.constants import ROLES
from organic_trace.database.base import Base
from organic_trace.models._columns import id_column


class UserRole(Base):
    __tablename__ = "user_roles"

    id = id_column()
    user_id = Column(String(36), nullable=False)
    role = Column(String(20), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", name="uq_user_roles_user"),
        CheckConstraint(
            "role IN ({})".format(", ".join("'{}'".format(role) for role in ROLES)),
            name="ck_user_roles_role",
        ),
    )


__all__ = ["UserRole"]
