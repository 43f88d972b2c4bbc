"""
Shared fixtures: a fresh SQLite database per test with a small forum seeded.
"""

from types import SimpleNamespace

import pytest
import pytest_asyncio

from devdrill.core.database import build_engine, build_session_factory, init_db
from devdrill.models.forum import Discussion, DiscussionGroup
from devdrill.models.user import Instructor, User
from devdrill.modules.forum import ForumService


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'forum.db'}", echo=False)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def forum(session_factory):
    return ForumService(session_factory)


@pytest_asyncio.fixture
async def seed(session_factory):
    """Two groups, three discussions and three users."""
    async with session_factory() as db:
        student = User(name="Ana", is_instructor=False)
        flagged = User(name="Ben", is_instructor=True)
        profiled = User(name="Cleo", is_instructor=False)
        db.add_all([student, flagged, profiled])
        await db.flush()

        # Cleo has an instructor profile but no stored flag
        db.add(Instructor(user_id=profiled.id))

        angular = DiscussionGroup(name="Angular Discussion", photo_url="angular.png")
        public = DiscussionGroup(name="Public Discussion", photo_url="")
        components = Discussion(name="Components", discussion_group=angular)
        routing = Discussion(name="Routing", discussion_group=angular)
        lounge = Discussion(name="Lounge", discussion_group=public)
        db.add_all([angular, public, components, routing, lounge])
        await db.commit()

        return SimpleNamespace(
            student_id=student.id,
            flagged_id=flagged.id,
            profiled_id=profiled.id,
            angular_id=angular.id,
            public_id=public.id,
            components_id=components.id,
            routing_id=routing.id,
            lounge_id=lounge.id,
        )
