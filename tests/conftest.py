import logging
import os
from datetime import datetime, timezone
from typing import Callable, List

import pytest

# Set test environment variables before any linen import reads settings
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ADMIN_API_SECRET"] = "test-admin-secret"
os.environ["OPENAI_API_KEY"] = "test-key"
os.environ["AUTO_SEED_THEMES"] = "false"

from linen.core.clock import CalendarClock  # noqa: E402
from linen.core.database import build_engine, build_session_factory, create_tables  # noqa: E402
from linen.models import User  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Wednesday 2025-10-15 12:00 in Los Angeles (PDT, UTC-7)
WEDNESDAY_NOON_UTC = datetime(2025, 10, 15, 19, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/app.log."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


def make_clock(instant: datetime) -> CalendarClock:
    """CalendarClock frozen at *instant* (aware UTC)."""
    return CalendarClock("America/Los_Angeles", now=lambda: instant)


@pytest.fixture
def clock_at() -> Callable[[datetime], CalendarClock]:
    return make_clock


@pytest.fixture
def wednesday_clock() -> CalendarClock:
    return make_clock(WEDNESDAY_NOON_UTC)


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = build_engine(TEST_DATABASE_URL)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def users(db_session) -> List[User]:
    """Two account rows for recap ownership."""
    rows = [
        User(id="user-1", name="Ada", email="ada@example.com"),
        User(id="user-2", name="Brook", email="brook@example.com"),
    ]
    db_session.add_all(rows)
    await db_session.commit()
    return rows
