"""
User models for forum authors.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devdrill.core.database import Base

if TYPE_CHECKING:
    from devdrill.models.forum import Reply, Thread


class User(Base):
    """Forum user account."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100))
    is_instructor: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relationships
    instructor: Mapped["Instructor | None"] = relationship(back_populates="user")
    threads: Mapped[list["Thread"]] = relationship(back_populates="user")
    replies: Mapped[list["Reply"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User {self.name}>"


class Instructor(Base):
    """Instructor profile attached to a user account."""

    __tablename__ = "instructors"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), unique=True)

    user: Mapped["User"] = relationship(back_populates="instructor")

    def __repr__(self) -> str:
        return f"<Instructor user={self.user_id}>"
