from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, String


def new_id() -> str:
    return str(uuid4())


def _utc_now():
    return datetime.now(timezone.utc)


def id_column():
    return Column(String(36), primary_key=True, default=new_id)


def created_at_column():
    return Column(DateTime(timezone=True), nullable=False, default=_utc_now)
