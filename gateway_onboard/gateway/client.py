# gateway_onboard/gateway/client.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from ..config import (
    CHANNEL_PATH,
    GATEWAY_BASE_URL,
    HTTP_CONNECT_TIMEOUT_SECONDS,
    HTTP_TIMEOUT_SECONDS,
    OPTION_PATH,
)
from ..errors import DecodeFailed, RequestFailed, TransportError
from ..types import OptionEntry

_LOGGER = logging.getLogger(__name__)


class OptionGateway(Protocol):
    """The three gateway operations the onboarding flow needs."""

    async def create_channel(self, payload: Dict[str, Any]) -> None: ...

    async def fetch_options(self) -> List[OptionEntry]: ...

    async def update_option(self, key: str, value: str) -> None: ...


def _parse_options(operation: str, body: str) -> List[OptionEntry]:
    """
    Decode {"data": [{"key": str, "value": str}, ...]}.
    Any deviation from that shape is a DecodeFailed for the whole response.
    """
    try:
        payload = json.loads(body)
    except ValueError as ex:
        raise DecodeFailed(operation, f"invalid JSON ({ex})", body) from ex

    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        raise DecodeFailed(operation, "expected an object with a 'data' list", body)

    entries: List[OptionEntry] = []
    for idx, item in enumerate(payload["data"]):
        if not isinstance(item, dict):
            raise DecodeFailed(operation, f"data[{idx}] is not an object", body)
        key = item.get("key")
        value = item.get("value")
        if not isinstance(key, str) or not isinstance(value, str):
            raise DecodeFailed(operation, f"data[{idx}] needs string 'key' and 'value'", body)
        entries.append(OptionEntry(key=key, value=value))
    return entries


class GatewayClient:
    """
    Async HTTP client for the gateway admin API.

    The system token is sent as-is in the Authorization header, which is
    how the gateway expects its admin access tokens.
    """

    def __init__(
        self,
        system_token: str,
        base_url: str = GATEWAY_BASE_URL,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[httpx.Timeout] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": system_token},
            timeout=timeout
            or httpx.Timeout(HTTP_TIMEOUT_SECONDS, connect=HTTP_CONNECT_TIMEOUT_SECONDS),
            transport=transport,
        )

    async def __aenter__(self) -> "GatewayClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, operation: str, method: str, path: str, **kwargs) -> httpx.Response:
        _LOGGER.debug("%s: %s %s%s", operation, method, self.base_url, path)
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as ex:
            raise TransportError(operation, ex) from ex

        if not resp.is_success:
            body = resp.text or "Unknown error"
            raise RequestFailed(operation, resp.status_code, body)
        return resp

    async def create_channel(self, payload: Dict[str, Any]) -> None:
        resp = await self._send("create channel", "POST", CHANNEL_PATH, json=payload)
        _LOGGER.info("Channel created successfully: %s", resp.text)

    async def fetch_options(self) -> List[OptionEntry]:
        operation = "fetch options"
        resp = await self._send(operation, "GET", OPTION_PATH)
        entries = _parse_options(operation, resp.text)
        _LOGGER.info("Received %d option items from gateway", len(entries))
        return entries

    async def update_option(self, key: str, value: str) -> None:
        await self._send(
            f"update option {key}",
            "PUT",
            OPTION_PATH,
            json={"key": key, "value": value},
        )
        _LOGGER.info("%s updated successfully", key)
