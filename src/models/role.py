from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Boolean, DateTime, Index, func

from src.db.base import Base

DEFAULT_ROLE_ID = 1


class Role(Base):
    __tablename__ = "roles"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default="1")
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


# Names are unique regardless of case or active state
Index("uq_roles_name_lower", func.lower(Role.name), unique=True)
