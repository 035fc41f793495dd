import uuid
from unittest.mock import AsyncMock, patch

from httpx import AsyncClient
from pytest import mark


@mark.asyncio
async def test_root_endpoint(client: AsyncClient) -> None:
    """Test root endpoint."""
    response = await client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


@mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test health check with a reachable database."""
    with patch("app.main.check_db", AsyncMock(return_value=True)):
        response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "reachable"
    assert data["version"] == "1.0.0"


@mark.asyncio
async def test_health_check_degraded(client: AsyncClient) -> None:
    """Health reports a degraded status when the database does not answer."""
    with patch("app.main.check_db", AsyncMock(return_value=False)):
        response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unreachable"


@mark.asyncio
async def test_request_id_header(client: AsyncClient) -> None:
    """Responses echo the caller's request id or carry a generated one."""
    response = await client.get("/", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    response = await client.get("/", headers={"X-API-Key": str(uuid.uuid4())})
    assert len(response.headers["X-Request-ID"]) == 32


@mark.asyncio
async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/", headers={"X-API-Key": str(uuid.uuid4())})
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


@mark.asyncio
async def test_metrics_rate_limit(client: AsyncClient) -> None:
    unique_key = str(uuid.uuid4())
    headers = {"X-API-Key": unique_key}

    # Hit the endpoint 5 times (allowed)
    for _ in range(5):
        response = await client.get("/metrics", headers=headers)
        assert response.status_code == 200
        assert "api_metrics" in response.json()

    # The 6th request should be rate limited
    response = await client.get("/metrics", headers=headers)
    assert response.status_code == 429
    assert "Rate limit exceeded" in response.text
