"""Pytest configuration and shared fixtures."""
import httpx
import pytest

from helpers import ENDPOINT_URL, make_session, mock_client
from settings import Settings


@pytest.fixture
def settings():
    return Settings(CHAT_ENDPOINT_URL=ENDPOINT_URL)


@pytest.fixture
def refused_session():
    """Session whose endpoint never answers: every connection is refused."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return make_session(mock_client(handler))
