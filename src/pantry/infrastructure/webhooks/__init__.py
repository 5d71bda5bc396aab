"""Webhook delivery infrastructure: HTTP transport and dispatcher wiring."""

from pantry.infrastructure.webhooks.dispatch_source import RepositoryDispatchSource
from pantry.infrastructure.webhooks.http_transport import HttpxWebhookTransport

__all__ = ["HttpxWebhookTransport", "RepositoryDispatchSource"]
