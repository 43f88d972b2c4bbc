"""
Read-only views returned by the forum service.

Fields that a projection does not load are left as None.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class View(BaseModel):
    """Immutable projection of persisted entities."""

    model_config = ConfigDict(frozen=True)


class UserSummary(View):
    """Author summary embedded in thread and reply views."""

    user_id: int
    name: str
    is_instructor: bool


class ThreadView(View):
    """
    Thread projection.

    The group listing fills only thread_id and reply_count.
    """

    thread_id: int
    reply_count: int
    topic: str | None = None
    detail: str | None = None
    insert_date: datetime | None = None
    upvote: int | None = None
    discussion_id: int | None = None
    user: UserSummary | None = None


class DiscussionView(View):
    """Discussion projection."""

    discussion_id: int
    name: str
    discussion_group_id: int
    discussion_group: DiscussionGroupView | None = None
    threads: list[ThreadView] | None = None


class DiscussionGroupView(View):
    """Discussion group projection."""

    discussion_group_id: int
    name: str
    photo_url: str | None = None
    discussions: list[DiscussionView] | None = None


class ReplyView(View):
    """Reply projection with the parent thread's topic."""

    reply_id: int
    thread_id: int
    detail: str
    insert_date: datetime
    upvote: int
    topic: str
    user: UserSummary


DiscussionView.model_rebuild()
