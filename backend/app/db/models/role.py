from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

DEFAULT_ROLE_NAME = "user"
PENDING_ROLE_NAME = "pending"


class Role(Base):
    __tablename__ = "roles"
    __table_args__ = (UniqueConstraint("name", "provider", name="uq_roles_name_provider"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), index=True)
    provider: Mapped[str] = mapped_column(String(100), index=True)
    priority: Mapped[int] = mapped_column(Integer, default=9999)
