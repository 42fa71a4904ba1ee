import asyncio
from typing import Awaitable, Callable, List, Tuple, TypeVar

import pytest
from fastapi.testclient import TestClient

from phone_orders.core.config import get_settings
from phone_orders.database import get_session_maker, init_db, reset_engine
from phone_orders.services.order_store import OrderStore
from phone_orders.services.printing import reset_print_channel
from phone_orders.services.printing.base import BasePrintChannel, PrintResult

T = TypeVar("T")

_CONFIG_ENVS = (
    "PRINT_METHOD",
    "PRINTNODE_API_KEY",
    "PRINTNODE_API_URL",
    "PRINTER_IDS",
    "PRINT_WEBHOOKS",
    "PRINT_TIMEOUT_SECONDS",
    "STRICT_STATUS_UPDATES",
    "DEBUG",
)


def _reset_caches() -> None:
    get_settings.cache_clear()
    reset_engine()
    reset_print_channel()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """
    Every test gets its own SQLite file and a clean print configuration.

    The working directory moves to tmp_path so a developer's .env file is
    not picked up.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}")
    for name in _CONFIG_ENVS:
        monkeypatch.delenv(name, raising=False)
    _reset_caches()
    yield
    _reset_caches()


@pytest.fixture()
def app():
    from phone_orders.main import app as api_app

    yield api_app
    api_app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    """TestClient with the lifespan (table creation) running."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def with_store() -> Callable[[Callable[[OrderStore], Awaitable[T]]], T]:
    """
    Run an async callback against a fresh OrderStore.

    Usage: ``order = with_store(lambda store: store.get_order(1))``
    """

    def _run(fn):
        async def _inner():
            await init_db()
            async with get_session_maker()() as session:
                return await fn(OrderStore(session))

        return asyncio.run(_inner())

    return _run


class RecordingChannel(BasePrintChannel):
    """In-memory print channel; optionally blows up on submit."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.tickets: List[Tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "recording"

    async def submit(self, business_id: str, ticket: str) -> PrintResult:
        if self.fail:
            raise RuntimeError("printer on fire")
        self.tickets.append((business_id, ticket))
        return PrintResult(success=True, channel=self.name, job_id=str(len(self.tickets)))


@pytest.fixture()
def recording_channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture()
def failing_channel() -> RecordingChannel:
    return RecordingChannel(fail=True)
