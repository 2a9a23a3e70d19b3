"""Pytest configuration and fixtures."""
import time
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.config import Settings
from app.services.intent_service import IntentService
from app.slack.signature import compute_signature

SIGNING_SECRET = "test-signing-secret"


@pytest.fixture
def settings():
    """Settings that don't read the environment or a .env file."""
    return Settings(
        _env_file=None,
        mongodb_url="mongodb://localhost:27017",
        slack_bot_token="xoxb-test",
        slack_signing_secret=SIGNING_SECRET,
    )


@pytest.fixture
def intents():
    """IntentService double; background tasks call into it."""
    return AsyncMock(spec=IntentService)


@pytest_asyncio.fixture
async def app_client(settings, intents):
    """
    Create a test client wired to a fake application context.

    This fixture:
    - Builds the app without running its lifespan (no MongoDB needed)
    - Installs a context whose intent_service() returns the `intents` double
    - Yields an async HTTP client for testing
    """
    from app.main import create_app

    app = create_app(settings)
    context = MagicMock()
    context.settings = settings
    context.intent_service.return_value = intents
    app.state.context = context

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
def signed_headers():
    """Build the headers Slack would send with a signed request."""

    def build(body: bytes, content_type: str, secret: str = SIGNING_SECRET, timestamp=None) -> dict:
        ts = str(int(time.time())) if timestamp is None else str(timestamp)
        return {
            "Content-Type": content_type,
            "X-Slack-Request-Timestamp": ts,
            "X-Slack-Signature": compute_signature(secret, ts, body),
        }

    return build
