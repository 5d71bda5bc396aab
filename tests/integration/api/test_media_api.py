"""Integration tests for the media endpoints."""

import pytest

from pantry.core.config import Settings
from pantry.infrastructure.storage import LocalStorageProvider

API = "/api/v1"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


async def upload(client, auth_headers, name="photo.png", content=PNG_BYTES, mime="image/png", description="Cover"):
    return await client.post(
        f"{API}/media",
        files={"file": (name, content, mime)},
        data={"description": description},
        headers=auth_headers,
    )


class TestMediaApi:
    @pytest.mark.asyncio
    async def test_upload(self, client, auth_headers, storage_provider) -> None:
        response = await upload(client, auth_headers)

        assert response.status_code == 201
        media = response.json()
        assert media["original_name"] == "photo.png"
        assert media["mime_type"] == "image/png"
        assert media["size"] == len(PNG_BYTES)
        assert media["description"] == "Cover"
        assert media["path"] == f"/uploads/{media['filename']}"
        assert (storage_provider.storage_path / media["filename"]).read_bytes() == PNG_BYTES

    @pytest.mark.asyncio
    async def test_list_and_get(self, client, auth_headers) -> None:
        first = (await upload(client, auth_headers, name="a.png")).json()
        second = (await upload(client, auth_headers, name="b.png")).json()

        listed = await client.get(f"{API}/media", headers=auth_headers)
        fetched = await client.get(f"{API}/media/{first['id']}", headers=auth_headers)

        assert [m["id"] for m in listed.json()] == [second["id"], first["id"]]
        assert fetched.json()["original_name"] == "a.png"

    @pytest.mark.asyncio
    async def test_disallowed_type(self, client, auth_headers) -> None:
        response = await upload(client, auth_headers, name="run.sh", content=b"echo", mime="application/x-sh")

        assert response.status_code == 415

    @pytest.mark.asyncio
    async def test_stored_suffix_matches_declared_type(self, client, auth_headers, storage_provider) -> None:
        """Test that an HTML file declared as PNG cannot be served back as HTML."""
        response = await upload(client, auth_headers, name="evil.html", content=b"<script>alert(1)</script>")

        assert response.status_code == 201
        media = response.json()
        assert media["original_name"] == "evil.html"
        assert media["filename"].endswith(".png")
        assert media["path"].endswith(".png")
        assert [p.suffix for p in storage_provider.storage_path.iterdir()] == [".png"]

    @pytest.mark.asyncio
    async def test_too_large(self, client, auth_headers, tmp_path) -> None:
        from pantry.infrastructure.api.app import app
        from pantry.infrastructure.api.dependencies import get_storage_provider

        small = LocalStorageProvider(settings=Settings(max_file_size=8), storage_path=str(tmp_path / "small"))
        app.dependency_overrides[get_storage_provider] = lambda: small

        response = await upload(client, auth_headers)

        assert response.status_code == 413
        assert (await client.get(f"{API}/media", headers=auth_headers)).json() == []

    @pytest.mark.asyncio
    async def test_delete_removes_record_and_file(self, client, auth_headers, storage_provider) -> None:
        media = (await upload(client, auth_headers)).json()

        response = await client.delete(f"{API}/media/{media['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert not (storage_provider.storage_path / media["filename"]).exists()
        missing = await client.get(f"{API}/media/{media['id']}", headers=auth_headers)
        assert missing.status_code == 404
        assert missing.json()["error"] == "Not found"

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client) -> None:
        assert (await client.get(f"{API}/media")).status_code == 401
        response = await client.post(f"{API}/media", files={"file": ("a.png", PNG_BYTES, "image/png")})
        assert response.status_code == 401


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_and_live(self, client) -> None:
        health = await client.get("/health")
        live = await client.get("/live")

        assert health.json()["status"] == "healthy"
        assert live.json()["status"] == "alive"

    @pytest.mark.asyncio
    async def test_api_root_and_correlation_id(self, client) -> None:
        response = await client.get("/api/v1", headers={"X-Correlation-ID": "cid_test"})

        assert response.json()["name"] == "Pantry"
        assert response.headers["X-Correlation-ID"] == "cid_test"
