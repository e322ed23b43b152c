import json
from unittest.mock import AsyncMock

import httpx
import pytest

from linen.api.dependencies import get_calendar_clock, get_text_generator
from linen.core.database import get_db_session_dependency
from linen.main import create_app

FREE_PAYLOAD = {
    "scriptureSection": {"reflections": ["Isaiah 2"], "sharedReflections": []},
    "bodySection": {"practices": ["Breath Prayer"], "notes": ["Slow breath"]},
    "communitySection": {"checkInSummary": "A quiet week", "sharedPosts": []},
    "promptingSection": {"suggestions": ["Walk slowly"]},
}


@pytest.fixture
def text_generator():
    generator = AsyncMock()
    generator.generate = AsyncMock(return_value=json.dumps(FREE_PAYLOAD))
    return generator


@pytest.fixture
def app(session_factory, wednesday_clock, text_generator):
    """App wired to the in-memory database, a fixed clock and a fake model."""
    application = create_app()

    async def _session_override():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session_dependency] = _session_override
    application.dependency_overrides[get_calendar_clock] = lambda: wednesday_clock
    application.dependency_overrides[get_text_generator] = lambda: text_generator
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
