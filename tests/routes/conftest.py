# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from app.dependencies import get_post_service
from app.main import app
from app.managers.rate_limiter import limiter
from app.managers.token_manager import create_access_token
from app.schemas import PostResponse, PostSnapshot, PostSummaryResponse


@pytest.fixture
def post_response() -> PostResponse:
    return PostResponse(
        pid="9f1c2b7e5d3a4c6b8e0f1a2b3c4d5e6f",
        title="Getting started with asyncio",
        description="A gentle introduction",
        content="Coroutines let a single thread juggle many sockets.",
        tags=["coroutines", "let", "single", "thread", "juggle", "many", "sockets"],
        author_url="/api/author/jdoe",
        categories_url=["/api/category/python"],
        created_at="2025-01-01 10:00:00",
        updated_at="No updates",
    )


@pytest.fixture
def summary_response(post_response: PostResponse) -> PostSummaryResponse:
    return PostSummaryResponse(
        pid=post_response.pid,
        title=post_response.title,
        description=post_response.description,
        post_url=f"/api/post/{post_response.pid}",
        author_url=post_response.author_url,
        categories_url=post_response.categories_url,
        created_at=post_response.created_at,
        updated_at=post_response.updated_at,
    )


@pytest.fixture
def snapshot(post_response: PostResponse) -> PostSnapshot:
    return PostSnapshot(
        pid=post_response.pid,
        title=post_response.title,
        description=post_response.description,
        content=post_response.content,
        tags=post_response.tags,
        author=uuid4(),
        categories=[uuid4()],
        created_at=post_response.created_at,
        updated_at=post_response.updated_at,
    )


@pytest.fixture
def mock_service(
    post_response: PostResponse,
    summary_response: PostSummaryResponse,
    snapshot: PostSnapshot,
) -> MagicMock:
    """Create a mock post pipeline."""
    mock = MagicMock()
    mock.list_posts = AsyncMock(return_value=[summary_response])
    mock.get_post = AsyncMock(return_value=post_response)
    mock.create_post = AsyncMock(return_value=post_response)
    mock.edit_post = AsyncMock(return_value=post_response)
    mock.delete_post = AsyncMock(return_value=snapshot)
    return mock


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Create auth headers with a valid access token."""
    token = create_access_token(subject="editor", expires_delta=timedelta(minutes=30))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(mock_service: MagicMock) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client with the post pipeline replaced by a mock."""
    limiter.enabled = False
    app.dependency_overrides[get_post_service] = lambda: mock_service
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
    limiter.enabled = True
