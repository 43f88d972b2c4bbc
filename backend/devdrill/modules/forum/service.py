"""
Forum Service - read and write operations over groups, threads and replies.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devdrill.core.database import get_session_factory, session_scope
from devdrill.modules.forum.mutations import ForumWriter
from devdrill.modules.forum.projections import ForumReader
from devdrill.modules.forum.schemas import (
    DiscussionGroupView,
    DiscussionView,
    ReplyView,
    ThreadView,
)


class ForumService:
    """
    Forum operations, each run in its own session.

    Every call opens a session, commits on success, rolls back on error
    and closes the session before returning.

    Usage:
        forum = ForumService()
        groups = await forum.list_discussion_groups()
        thread_id = await forum.create_thread(user_id, discussion_id, "Topic", "Body")
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        """Initialize forum service with a session factory."""
        self.session_factory = session_factory or get_session_factory()

    # ==================== Reads ====================

    async def list_discussion_groups(self) -> list[DiscussionGroupView]:
        """Get all groups with nested discussions and thread reply counts."""
        async with session_scope(self.session_factory) as db:
            return await ForumReader(db).list_discussion_groups()

    async def get_discussion(self, discussion_id: int) -> DiscussionView | None:
        """Get discussion with its group summary, or None."""
        async with session_scope(self.session_factory) as db:
            return await ForumReader(db).get_discussion(discussion_id)

    async def list_threads_by_discussion(self, discussion_id: int) -> list[ThreadView]:
        """Get threads in a discussion."""
        async with session_scope(self.session_factory) as db:
            return await ForumReader(db).list_threads_by_discussion(discussion_id)

    async def get_thread(self, thread_id: int) -> ThreadView | None:
        """Get thread by ID, or None."""
        async with session_scope(self.session_factory) as db:
            return await ForumReader(db).get_thread(thread_id)

    async def list_replies_by_thread(self, thread_id: int) -> list[ReplyView]:
        """Get replies in a thread."""
        async with session_scope(self.session_factory) as db:
            return await ForumReader(db).list_replies_by_thread(thread_id)

    # ==================== Threads ====================

    async def create_thread(
        self,
        user_id: int,
        discussion_id: int,
        topic: str,
        detail: str,
    ) -> int:
        """Create thread and return its ID."""
        async with session_scope(self.session_factory) as db:
            return await ForumWriter(db).create_thread(
                user_id=user_id,
                discussion_id=discussion_id,
                topic=topic,
                detail=detail,
            )

    async def update_thread(self, thread_id: int, topic: str, detail: str) -> None:
        """Update thread topic and detail. Raises NotFoundError."""
        async with session_scope(self.session_factory) as db:
            await ForumWriter(db).update_thread(thread_id, topic, detail)

    async def vote_thread(self, thread_id: int, delta: int) -> int:
        """Up/down vote a thread. Raises NotFoundError."""
        async with session_scope(self.session_factory) as db:
            return await ForumWriter(db).vote_thread(thread_id, delta)

    # ==================== Replies ====================

    async def create_reply(self, user_id: int, thread_id: int, detail: str) -> int:
        """Create reply and return its ID."""
        async with session_scope(self.session_factory) as db:
            return await ForumWriter(db).create_reply(
                user_id=user_id,
                thread_id=thread_id,
                detail=detail,
            )

    async def update_reply(self, reply_id: int, detail: str) -> None:
        """Update reply detail. Raises NotFoundError."""
        async with session_scope(self.session_factory) as db:
            await ForumWriter(db).update_reply(reply_id, detail)

    async def delete_reply(self, reply_id: int) -> None:
        """Delete reply. Raises NotFoundError."""
        async with session_scope(self.session_factory) as db:
            await ForumWriter(db).delete_reply(reply_id)

    async def vote_reply(self, reply_id: int, delta: int) -> int:
        """Up/down vote a reply. Raises NotFoundError."""
        async with session_scope(self.session_factory) as db:
            return await ForumWriter(db).vote_reply(reply_id, delta)
