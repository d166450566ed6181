import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_endpoint_returns_service_metadata(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["service"]
    assert payload["status"] == "ok"
    assert payload["storage"]["backend"] == "memory"
    assert payload["storage"]["partitions"] == 5
    assert response.headers["X-Request-ID"]
