"""httpx-based transport for outbound webhook calls."""

from typing import Any, Mapping

import httpx

from pantry.domain.services.webhook_dispatcher import (
    WebhookResponse,
    WebhookTransport,
    WebhookTransportError,
)


class HttpxWebhookTransport(WebhookTransport):
    """Performs webhook POSTs over a shared ``httpx.AsyncClient``.

    Exactly one attempt is made per call and redirects are not followed.
    Any HTTP response, whatever its status, is returned to the caller;
    only failures to obtain a response raise ``WebhookTransportError``.
    """

    def __init__(
        self,
        timeout_seconds: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout_seconds: Connect/read/write/pool timeout for each call.
            client: Optional preconfigured client (tests pass one built on
                ``httpx.MockTransport``). A client passed in is not closed
                by ``aclose``.
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=False,
        )

    async def post(
        self,
        url: str,
        body: Mapping[str, Any],
        headers: Mapping[str, str],
    ) -> WebhookResponse:
        try:
            response = await self._client.post(url, json=dict(body), headers=dict(headers))
        except httpx.TimeoutException as e:
            raise WebhookTransportError(url, f"timeout: {type(e).__name__}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise WebhookTransportError(url, str(e) or type(e).__name__) from e

        return WebhookResponse(status_code=response.status_code, body=response.text)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
