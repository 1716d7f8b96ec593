from organic_trace.database.base import Base
from organic_trace.database.engine import build_engine, engine
from organic_trace.database.session import SessionLocal

__all__ = ["Base", "SessionLocal", "build_engine", "engine"]
