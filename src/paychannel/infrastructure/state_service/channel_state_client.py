"""HTTP client for the off-chain channel state service."""

from __future__ import annotations

from typing import Optional, Type
from types import TracebackType

import httpx
from pydantic import ValidationError

from ...application.shared.channel_state_payloads import (
    ChannelStateReply,
    ChannelStateRequest,
    ChannelStateResponsePayload,
    deserialize_channel_state_reply,
    serialize_channel_state_request,
)
from ...domain.errors import AuthenticationError, StateFetchError
from ..http.http_client import AsyncHttpClient

AUTH_REJECTED_STATUS_CODES = {401, 403}


class AsyncChannelStateClient:
    """Asynchronous client for the channel state service.

    Implements `ChannelStateServiceProtocol` as a single-shot request with
    no retries.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = AsyncHttpClient(base_url, timeout=timeout, transport=transport)

    async def get_channel_state(
        self, request: ChannelStateRequest
    ) -> ChannelStateReply:
        payload = serialize_channel_state_request(request)
        try:
            data = await self._http.post_json("/channel-state", payload.model_dump())
            response = ChannelStateResponsePayload.model_validate(data)
            return deserialize_channel_state_reply(response)
        except httpx.HTTPStatusError as e:
            if e.response.status_code in AUTH_REJECTED_STATUS_CODES:
                raise AuthenticationError(
                    f"State service rejected channel state request: {_detail(e.response)}"
                ) from e
            raise StateFetchError(f"Failed to fetch channel state: {e}") from e
        except httpx.TimeoutException as e:
            raise StateFetchError(f"State service timed out: {e}") from e
        except httpx.RequestError as e:
            raise StateFetchError(f"Could not connect to state service: {e}") from e
        except ValidationError as e:
            raise StateFetchError(f"Invalid channel state from service: {e}") from e
        except ValueError as e:
            raise StateFetchError(f"Undecodable channel state response: {e}") from e

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncChannelStateClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()


def _detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except Exception:
        detail = None
    return str(detail) if detail else response.text
