"""
Forum projections - read-only views over the forum graph.

Each query loads exactly the relations its view needs; reply counts
are always computed at read time.
"""

from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from devdrill.models.forum import Discussion, DiscussionGroup, Reply, Thread
from devdrill.models.user import User
from devdrill.modules.forum.schemas import (
    DiscussionGroupView,
    DiscussionView,
    ReplyView,
    ThreadView,
    UserSummary,
)


def _reply_count_subquery():
    return (
        select(func.count(Reply.id))
        .where(Reply.thread_id == Thread.id)
        .correlate(Thread)
        .scalar_subquery()
        .label("reply_count")
    )


def _thread_view(thread: Thread, reply_count: int) -> ThreadView:
    return ThreadView(
        thread_id=thread.id,
        topic=thread.topic,
        detail=thread.detail,
        insert_date=thread.insert_date,
        upvote=thread.upvote,
        reply_count=reply_count,
        discussion_id=thread.discussion_id,
        user=UserSummary(
            user_id=thread.user.id,
            name=thread.user.name,
            is_instructor=thread.user.is_instructor,
        ),
    )


class ForumReader:
    """
    Builds read-only forum views.

    Usage:
        reader = ForumReader(db_session)
        threads = await reader.list_threads_by_discussion(discussion_id=3)
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize reader with database session."""
        self.db = db

    # ==================== Groups ====================

    async def list_discussion_groups(self) -> list[DiscussionGroupView]:
        """
        Get every group with its discussions and their threads.

        Threads carry only their id and reply count; authors are not loaded.
        """
        query = select(DiscussionGroup).options(
            selectinload(DiscussionGroup.discussions).selectinload(
                Discussion.threads
            )
        )
        result = await self.db.execute(query)
        groups = list(result.scalars().all())

        thread_ids = [
            thread.id
            for group in groups
            for discussion in group.discussions
            for thread in discussion.threads
        ]
        reply_counts = await self._count_replies(thread_ids)

        return [
            DiscussionGroupView(
                discussion_group_id=group.id,
                name=group.name,
                photo_url=group.photo_url,
                discussions=[
                    DiscussionView(
                        discussion_id=discussion.id,
                        name=discussion.name,
                        discussion_group_id=discussion.discussion_group_id,
                        threads=[
                            ThreadView(
                                thread_id=thread.id,
                                reply_count=reply_counts.get(thread.id, 0),
                            )
                            for thread in discussion.threads
                        ],
                    )
                    for discussion in group.discussions
                ],
            )
            for group in groups
        ]

    async def _count_replies(self, thread_ids: Iterable[int]) -> dict[int, int]:
        """Count replies per thread in one grouped query."""
        thread_ids = list(thread_ids)
        if not thread_ids:
            return {}

        query = (
            select(Reply.thread_id, func.count(Reply.id))
            .where(Reply.thread_id.in_(thread_ids))
            .group_by(Reply.thread_id)
        )
        result = await self.db.execute(query)
        return {thread_id: count for thread_id, count in result.all()}

    # ==================== Discussions ====================

    async def get_discussion(self, discussion_id: int) -> DiscussionView | None:
        """Get discussion with its group summary; threads are not loaded."""
        query = (
            select(Discussion)
            .options(joinedload(Discussion.discussion_group))
            .where(Discussion.id == discussion_id)
        )
        result = await self.db.execute(query)
        discussion = result.scalar_one_or_none()

        if not discussion:
            return None

        group = discussion.discussion_group
        return DiscussionView(
            discussion_id=discussion.id,
            name=discussion.name,
            discussion_group_id=discussion.discussion_group_id,
            discussion_group=DiscussionGroupView(
                discussion_group_id=group.id,
                name=group.name,
                photo_url=group.photo_url,
            ),
            threads=None,
        )

    # ==================== Threads ====================

    async def list_threads_by_discussion(self, discussion_id: int) -> list[ThreadView]:
        """Get full thread views in a discussion. Unknown ids yield []."""
        query = (
            select(Thread, _reply_count_subquery())
            .options(joinedload(Thread.user))
            .where(Thread.discussion_id == discussion_id)
        )
        result = await self.db.execute(query)
        return [_thread_view(thread, reply_count) for thread, reply_count in result.all()]

    async def get_thread(self, thread_id: int) -> ThreadView | None:
        """Get full thread view by ID."""
        query = (
            select(Thread, _reply_count_subquery())
            .options(joinedload(Thread.user))
            .where(Thread.id == thread_id)
        )
        result = await self.db.execute(query)
        row = result.one_or_none()

        if row is None:
            return None
        return _thread_view(*row)

    # ==================== Replies ====================

    async def list_replies_by_thread(self, thread_id: int) -> list[ReplyView]:
        """
        Get replies in a thread.

        The author's instructor flag is derived from the presence of an
        instructor profile, not from User.is_instructor.
        """
        query = (
            select(Reply)
            .options(
                joinedload(Reply.user).joinedload(User.instructor),
                joinedload(Reply.thread),
            )
            .where(Reply.thread_id == thread_id)
        )
        result = await self.db.execute(query)

        return [
            ReplyView(
                reply_id=reply.id,
                thread_id=reply.thread_id,
                detail=reply.detail,
                insert_date=reply.insert_date,
                upvote=reply.upvote,
                topic=reply.thread.topic,
                user=UserSummary(
                    user_id=reply.user.id,
                    name=reply.user.name,
                    is_instructor=reply.user.instructor is not None,
                ),
            )
            for reply in result.scalars().all()
        ]
