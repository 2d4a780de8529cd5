"""
Websocket service for EFIHUB.

Base path: /websocket
"""

from collections.abc import Mapping
from typing import Any

import structlog

from efihub.api.http_client import HttpClient
from efihub.api.response import Rule, expect_success, first_match, is_bool
from efihub.exceptions import RemoteCallError

logger = structlog.get_logger(__name__)

DISPATCH_ENDPOINT = "/websocket/dispatch"


class WebsocketService:
    """Broadcasts events to websocket channel subscribers."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def dispatch(
        self,
        channel: str,
        event: str,
        data: Any,
        extra: Mapping[str, Any] | None = None,
    ) -> bool:
        """
        Dispatch an event to a websocket channel.

        Args:
            channel: Channel name, e.g. "orders:updates".
            event: Event name, e.g. "OrderUpdated".
            data: JSON-serializable payload sent to subscribers.
            extra: Extra fields merged into the payload.

        Returns:
            The server's ``success`` flag when present, else True on a 2xx.
        """
        payload = {"channel": channel, "event": event, "data": data, **(extra or {})}
        response = self._http.post(DISPATCH_ENDPOINT, payload)
        try:
            body = expect_success(response, DISPATCH_ENDPOINT)
        except RemoteCallError as e:
            logger.warning(
                "Websocket dispatch failed", status=e.code, channel=channel, event_name=event
            )
            return False

        success = first_match(body, [Rule("success", is_bool)])
        return True if success is None else success
