from sqlalchemy import Column, DateTime, Integer, JSON, String
from sqlalchemy.sql import func

from ..platform.database import Base


class KeyValueEntry(Base):
    """Namespaced JSON blob, e.g. ``performance-metrics-<user_id>``."""

    __tablename__ = "kv_entries"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(255), nullable=False, unique=True, index=True)
    value = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
