"""
Shared pytest configuration.

Sets test environment variables before anything imports settings, then
provides an in-memory database, upstream-service settings and helpers for
faking external HTTP services with httpx.MockTransport.
"""
import os

# Must run before config.appconfig / app.database.connection are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from typing import AsyncIterator, Callable, List

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.model_registry  # noqa: F401
from app.database.connection import Base
from config.serviceconfig import ServiceSettings

ASR_URL = "http://asr.test/v2/transcribe"
IMAGE_URL = "http://image.test"
SEARCH_URL = "http://search.test/customsearch/v1"
TRANSLATION_URL = "http://translate.test/v1/translate"
TTS_URL = "http://tts.test/v1/tts"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def make_transport() -> Callable[[Callable[[httpx.Request], httpx.Response]], RecordingTransport]:
    return RecordingTransport


@pytest.fixture
def service_settings() -> ServiceSettings:
    return ServiceSettings(
        _env_file=None,
        GHANA_API_KEY="test-subscription-key",
        GHANA_ASR_BASE_URL=ASR_URL,
        IMAGE_MODEL_URL=IMAGE_URL,
        GOOGLE_API_KEY="google-key",
        GOOGLE_SEARCH_ENGINE_ID="engine-id",
        GOOGLE_SEARCH_URL=SEARCH_URL,
        GHANA_TRANSLATION_URL=TRANSLATION_URL,
        GHANA_TTS_URL=TTS_URL,
    )


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session
