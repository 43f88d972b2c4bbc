import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from devdrill.models.forum import Reply, Thread
from devdrill.modules.forum import NotFoundError


async def _count(session_factory, model) -> int:
    async with session_factory() as db:
        return await db.scalar(select(func.count()).select_from(model))


async def test_create_then_get_thread(forum, seed):
    thread_id = await forum.create_thread(seed.student_id, seed.components_id, "Pipes", "Async?")

    thread = await forum.get_thread(thread_id)

    assert thread.topic == "Pipes"
    assert thread.detail == "Async?"
    assert thread.reply_count == 0
    assert thread.upvote == 0
    assert thread.discussion_id == seed.components_id
    assert thread.user.user_id == seed.student_id


async def test_create_thread_with_unknown_discussion(forum, seed, session_factory):
    with pytest.raises(IntegrityError):
        await forum.create_thread(seed.student_id, 999, "Lost", "...")

    assert await _count(session_factory, Thread) == 0


async def test_create_thread_with_unknown_user(forum, seed):
    with pytest.raises(IntegrityError):
        await forum.create_thread(999, seed.components_id, "Ghost", "...")


async def test_update_thread_keeps_other_fields(forum, seed):
    thread_id = await forum.create_thread(seed.student_id, seed.components_id, "Old", "old")
    await forum.vote_thread(thread_id, 1)
    before = await forum.get_thread(thread_id)

    await forum.update_thread(thread_id, "New", "new")
    after = await forum.get_thread(thread_id)

    assert after.topic == "New"
    assert after.detail == "new"
    assert after.upvote == before.upvote == 1
    assert after.insert_date == before.insert_date
    assert after.user == before.user
    assert after.discussion_id == before.discussion_id


async def test_update_missing_thread(forum, seed):
    with pytest.raises(NotFoundError) as exc_info:
        await forum.update_thread(999, "x", "y")

    assert exc_info.value.entity == "Thread"
    assert exc_info.value.entity_id == 999


async def test_create_reply(forum, seed, session_factory):
    thread_id = await forum.create_thread(seed.student_id, seed.components_id, "t", "d")

    reply_id = await forum.create_reply(seed.student_id, thread_id, "hello")

    async with session_factory() as db:
        reply = await db.get(Reply, reply_id)
    assert reply.detail == "hello"
    assert reply.upvote == 0
    assert reply.thread_id == thread_id
    assert reply.insert_date is not None


async def test_create_reply_with_unknown_thread(forum, seed, session_factory):
    with pytest.raises(IntegrityError):
        await forum.create_reply(seed.student_id, 999, "orphan")

    assert await _count(session_factory, Reply) == 0


async def test_update_reply(forum, seed):
    thread_id = await forum.create_thread(seed.student_id, seed.components_id, "t", "d")
    reply_id = await forum.create_reply(seed.flagged_id, thread_id, "first")

    await forum.update_reply(reply_id, "edited")

    [reply] = await forum.list_replies_by_thread(thread_id)
    assert reply.detail == "edited"
    assert reply.user.user_id == seed.flagged_id


async def test_update_missing_reply_writes_nothing(forum, seed, session_factory):
    thread_id = await forum.create_thread(seed.student_id, seed.components_id, "t", "d")
    await forum.create_reply(seed.flagged_id, thread_id, "first")

    with pytest.raises(NotFoundError):
        await forum.update_reply(999, "edited")

    [reply] = await forum.list_replies_by_thread(thread_id)
    assert reply.detail == "first"
    assert await _count(session_factory, Reply) == 1


async def test_delete_reply(forum, seed):
    thread_id = await forum.create_thread(seed.student_id, seed.components_id, "t", "d")
    keep = await forum.create_reply(seed.flagged_id, thread_id, "keep")
    drop = await forum.create_reply(seed.flagged_id, thread_id, "drop")
    before = (await forum.get_thread(thread_id)).reply_count

    await forum.delete_reply(drop)

    replies = await forum.list_replies_by_thread(thread_id)
    assert [r.reply_id for r in replies] == [keep]
    assert (await forum.get_thread(thread_id)).reply_count == before - 1


async def test_delete_missing_reply(forum, seed):
    with pytest.raises(NotFoundError):
        await forum.delete_reply(999)


async def test_not_found_is_a_lookup_error(forum, seed):
    with pytest.raises(LookupError):
        await forum.delete_reply(999)
