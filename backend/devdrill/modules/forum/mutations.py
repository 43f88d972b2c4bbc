"""
Forum mutations - thread and reply writes and vote adjustment.
"""

from datetime import datetime

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from devdrill.models.forum import Reply, Thread
from devdrill.modules.forum.exceptions import NotFoundError
from devdrill.modules.forum.voting import VALID_DELTAS, apply_vote


class ForumWriter:
    """
    Creates, updates and deletes threads and replies.

    Foreign keys are not checked before insert; the database rejects
    dangling user, discussion or thread ids.

    Usage:
        writer = ForumWriter(db_session)
        thread_id = await writer.create_thread(user_id=1, discussion_id=2, ...)
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize writer with database session."""
        self.db = db

    async def _get_or_raise(self, model: type[Thread] | type[Reply], entity_id: int):
        instance = await self.db.get(model, entity_id)
        if instance is None:
            raise NotFoundError(model.__name__, entity_id)
        return instance

    # ==================== Threads ====================

    async def create_thread(
        self,
        user_id: int,
        discussion_id: int,
        topic: str,
        detail: str,
    ) -> int:
        """
        Create new thread.

        Args:
            user_id: Author user ID
            discussion_id: Parent discussion ID
            topic: Thread topic
            detail: Thread body

        Returns:
            ID of the created thread
        """
        thread = Thread(
            user_id=user_id,
            discussion_id=discussion_id,
            topic=topic,
            detail=detail,
            upvote=0,
            insert_date=datetime.now(),
        )
        self.db.add(thread)
        await self.db.flush()

        logger.info(f"Thread {thread.id} created in discussion {discussion_id} by user {user_id}")
        return thread.id

    async def update_thread(self, thread_id: int, topic: str, detail: str) -> None:
        """Overwrite thread topic and detail."""
        thread = await self._get_or_raise(Thread, thread_id)
        thread.topic = topic
        thread.detail = detail
        await self.db.flush()

        logger.info(f"Thread {thread_id} updated")

    # ==================== Replies ====================

    async def create_reply(self, user_id: int, thread_id: int, detail: str) -> int:
        """
        Create new reply in thread.

        Args:
            user_id: Author user ID
            thread_id: Parent thread ID
            detail: Reply body

        Returns:
            ID of the created reply
        """
        reply = Reply(
            user_id=user_id,
            thread_id=thread_id,
            detail=detail,
            upvote=0,
            insert_date=datetime.now(),
        )
        self.db.add(reply)
        await self.db.flush()

        logger.info(f"Reply {reply.id} created in thread {thread_id} by user {user_id}")
        return reply.id

    async def update_reply(self, reply_id: int, detail: str) -> None:
        """Overwrite reply detail."""
        reply = await self._get_or_raise(Reply, reply_id)
        reply.detail = detail
        await self.db.flush()

        logger.info(f"Reply {reply_id} updated")

    async def delete_reply(self, reply_id: int) -> None:
        """Delete reply."""
        reply = await self._get_or_raise(Reply, reply_id)
        await self.db.delete(reply)
        await self.db.flush()

        logger.info(f"Reply {reply_id} deleted")

    # ==================== Votes ====================

    async def vote_thread(self, thread_id: int, delta: int) -> int:
        """Apply an up/down vote to a thread. Returns the counter value."""
        return await self._adjust_vote(Thread, thread_id, delta)

    async def vote_reply(self, reply_id: int, delta: int) -> int:
        """Apply an up/down vote to a reply. Returns the counter value."""
        return await self._adjust_vote(Reply, reply_id, delta)

    async def _adjust_vote(
        self,
        model: type[Thread] | type[Reply],
        entity_id: int,
        delta: int,
    ) -> int:
        """
        Read, adjust and write an upvote counter.

        Invalid deltas and votes that would overflow the counter leave it
        untouched and return the current value. There is no locking, so
        concurrent votes on the same row can overwrite each other.
        """
        instance = await self._get_or_raise(model, entity_id)

        new_value = apply_vote(instance.upvote, delta)
        if new_value is None:
            if delta not in VALID_DELTAS:
                logger.warning(
                    f"Ignoring vote delta {delta} on {model.__name__} {entity_id}"
                )
            else:
                logger.warning(
                    f"{model.__name__} {entity_id} upvote saturated at {instance.upvote}"
                )
            return instance.upvote

        instance.upvote = new_value
        await self.db.flush()

        logger.debug(f"{model.__name__} {entity_id} upvote -> {new_value}")
        return new_value
