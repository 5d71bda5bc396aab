"""Integration tests for the DELETE endpoints.

Every DELETE answers 204 with an empty body on success and a JSON 404
otherwise.
"""

import pytest

from pantry.infrastructure.api.app import create_app

API = "/api/v1"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8


def test_app_builds_with_all_routes() -> None:
    paths = {route.path for route in create_app().routes}

    assert f"{API}/collections/{{collection_id}}" in paths
    assert f"{API}/collections/{{collection_id}}/items/{{item_id}}" in paths
    assert f"{API}/webhooks/{{webhook_id}}" in paths
    assert f"{API}/media/{{media_id}}" in paths


class TestDeleteResponses:
    @pytest.mark.asyncio
    async def test_deletes_answer_204_without_body(self, client, auth_headers) -> None:
        collection = await client.post(
            f"{API}/collections", json={"name": "Articles", "schema": {"title": "string"}}, headers=auth_headers
        )
        collection_id = collection.json()["id"]
        item = await client.post(
            f"{API}/collections/{collection_id}/items", json={"title": "x"}, headers=auth_headers
        )
        webhook = await client.post(
            f"{API}/collections/{collection_id}/webhooks",
            json={"url": "https://hooks.example.com/a", "events": ["delete"]},
            headers=auth_headers,
        )
        media = await client.post(
            f"{API}/media", files={"file": ("a.png", PNG_BYTES, "image/png")}, headers=auth_headers
        )

        urls = [
            f"{API}/collections/{collection_id}/items/{item.json()['id']}",
            f"{API}/webhooks/{webhook.json()['id']}",
            f"{API}/media/{media.json()['id']}",
            f"{API}/collections/{collection_id}",
        ]
        for url in urls:
            response = await client.delete(url, headers=auth_headers)

            assert response.status_code == 204, url
            assert response.content == b"", url

    @pytest.mark.asyncio
    async def test_missing_targets_answer_404_json(self, client, auth_headers) -> None:
        urls = [
            f"{API}/collections/missing/items/missing",
            f"{API}/webhooks/missing",
            f"{API}/media/missing",
            f"{API}/collections/missing",
        ]
        for url in urls:
            response = await client.delete(url, headers=auth_headers)

            assert response.status_code == 404, url
            assert response.json()["error"] == "Not found", url
