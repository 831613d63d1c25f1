from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.models.role import Role


class User(Base):
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", "provider", name="uq_users_email_provider"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(320), index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    provider: Mapped[str] = mapped_column(String(100), index=True)
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    activation_digest: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    activation_sent_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    role_id: Mapped[int | None] = mapped_column(ForeignKey("roles.id"), nullable=True, index=True)
    created_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    role: Mapped[Role | None] = relationship(Role, lazy="joined")
