from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship

from src.db.base import Base
from src.models.role import Role, DEFAULT_ROLE_ID


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String)
    first_name = Column(String)
    last_name = Column(String)
    avatar = Column(String)
    job = Column(String, nullable=True)
    role_id = Column(
        Integer,
        ForeignKey("roles.id"),
        default=DEFAULT_ROLE_ID,
        server_default=str(DEFAULT_ROLE_ID),
    )

    # No cascade: a user keeps its role_id after the role is deactivated
    role = relationship(Role, lazy="noload")
