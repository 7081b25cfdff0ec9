import random
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from stepflow.main import create_app
from stepflow.services.store import MemoryStore


class FakeClock:
    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryStore(rng=random.Random(1234), clock=clock)


@pytest.fixture
def app(store):
    return create_app(store)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def onboarding_payload():
    return {
        "name": "Onboarding",
        "steps": [
            {"id": "start", "type": "start", "position": {"x": 250, "y": 50}, "data": {}},
            {"id": "end", "type": "end", "position": {"x": 250, "y": 400}, "data": {}},
        ],
        "connections": [{"id": "estart-end", "source": "start", "target": "end"}],
    }
