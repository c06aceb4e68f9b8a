"""
API tests for the health and root endpoints.
"""


class TestHealth:
    async def test_healthy(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"] == {"database": "healthy", "schema": "healthy"}
        assert body["version"] == "1.0.0"

    async def test_request_id_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"


class TestRoot:
    async def test_info(self, client):
        response = await client.get("/")

        assert response.json()["name"] == "Jobly API"


class TestErrorEnvelope:
    async def test_unknown_route(self, client):
        response = await client.get("/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "HTTP_404"

    async def test_wrong_method(self, client):
        response = await client.put("/companies/c1", json={})

        assert response.status_code == 405
