"""
Forum models for community discussions.

Includes:
- Discussion groups (top-level categories)
- Discussions (boards within a group)
- Threads (topic-starting posts)
- Replies
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devdrill.core.database import Base

if TYPE_CHECKING:
    from devdrill.models.user import User


class DiscussionGroup(Base):
    """Top-level forum category, e.g. "Angular Discussion"."""

    __tablename__ = "discussion_groups"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100))
    photo_url: Mapped[str | None] = mapped_column(String(255))

    # Relationships
    discussions: Mapped[list["Discussion"]] = relationship(
        back_populates="discussion_group"
    )

    def __repr__(self) -> str:
        return f"<DiscussionGroup {self.name}>"


class Discussion(Base):
    """Board within a discussion group."""

    __tablename__ = "discussions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    discussion_group_id: Mapped[int] = mapped_column(
        ForeignKey("discussion_groups.id")
    )
    name: Mapped[str] = mapped_column(String(100))

    # Relationships
    discussion_group: Mapped["DiscussionGroup"] = relationship(
        back_populates="discussions"
    )
    threads: Mapped[list["Thread"]] = relationship(back_populates="discussion")

    def __repr__(self) -> str:
        return f"<Discussion {self.name}>"


class Thread(Base):
    """Forum thread."""

    __tablename__ = "threads"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    discussion_id: Mapped[int] = mapped_column(ForeignKey("discussions.id"))
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))

    topic: Mapped[str] = mapped_column(String(255))
    detail: Mapped[str] = mapped_column(Text)

    # Stats
    upvote: Mapped[int] = mapped_column(Integer, default=0)

    # Timestamps
    insert_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)

    # Relationships
    discussion: Mapped["Discussion"] = relationship(back_populates="threads")
    user: Mapped["User"] = relationship(back_populates="threads")
    replies: Mapped[list["Reply"]] = relationship(back_populates="thread")

    def __repr__(self) -> str:
        return f"<Thread {self.topic[:30]}>"


class Reply(Base):
    """Reply to a thread."""

    __tablename__ = "replies"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    thread_id: Mapped[int] = mapped_column(ForeignKey("threads.id"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))

    detail: Mapped[str] = mapped_column(Text)

    # Stats
    upvote: Mapped[int] = mapped_column(Integer, default=0)

    # Timestamps
    insert_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)

    # Relationships
    thread: Mapped["Thread"] = relationship(back_populates="replies")
    user: Mapped["User"] = relationship(back_populates="replies")

    def __repr__(self) -> str:
        return f"<Reply {self.id} in thread {self.thread_id}>"
