"""HTTP client for the escrow contract gateway."""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional, Type
from types import TracebackType

import httpx
from pydantic import ValidationError

from ...domain.entities import OnChainChannel, TransactionReceipt
from ...domain.errors import StateFetchError, TransactionError
from ...domain.protocols import AccountSigner, TypedValue
from ..http.http_client import AsyncHttpClient

logger = logging.getLogger(__name__)


class AsyncEscrowClient:
    """Asynchronous client for the escrow contract exposed over HTTP.

    Implements `EscrowContractProtocol`. Transactions are authorized by the
    account signing the uint256 arguments of the call, in order.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = AsyncHttpClient(base_url, timeout=timeout, transport=transport)

    async def read_channel(self, channel_id: int) -> OnChainChannel:
        try:
            data = await self._http.get_json(f"/channels/{channel_id}")
            return OnChainChannel.model_validate(data)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise StateFetchError(
                    f"Channel {channel_id} not found in escrow"
                ) from e
            raise StateFetchError(f"Failed to read channel {channel_id}: {e}") from e
        except httpx.RequestError as e:
            raise StateFetchError(f"Could not connect to escrow gateway: {e}") from e
        except ValidationError as e:
            raise StateFetchError(
                f"Invalid channel data from escrow gateway: {e}"
            ) from e
        except ValueError as e:
            raise StateFetchError(f"Undecodable escrow gateway response: {e}") from e

    async def channel_add_funds(
        self, account: AccountSigner, channel_id: int, amount: int
    ) -> TransactionReceipt:
        return await self._submit(
            account,
            channel_id,
            "funds",
            {"amount": amount},
            ("uint256", channel_id),
            ("uint256", amount),
        )

    async def channel_extend(
        self, account: AccountSigner, channel_id: int, expiration: int
    ) -> TransactionReceipt:
        return await self._submit(
            account,
            channel_id,
            "extensions",
            {"expiration": expiration},
            ("uint256", channel_id),
            ("uint256", expiration),
        )

    async def channel_extend_and_add_funds(
        self,
        account: AccountSigner,
        channel_id: int,
        expiration: int,
        amount: int,
    ) -> TransactionReceipt:
        return await self._submit(
            account,
            channel_id,
            "extensions-and-funds",
            {"expiration": expiration, "amount": amount},
            ("uint256", channel_id),
            ("uint256", expiration),
            ("uint256", amount),
        )

    async def _submit(
        self,
        account: AccountSigner,
        channel_id: int,
        action: str,
        fields: Dict[str, Any],
        *signed_values: TypedValue,
    ) -> TransactionReceipt:
        signature = account.sign_typed_data(*signed_values)
        body = {
            "sender": account.public_key_der_b64,
            **fields,
            "signature_b64": base64.b64encode(signature).decode("utf-8"),
        }
        path = f"/channels/{channel_id}/{action}"
        try:
            data = await self._http.post_json(path, body)
            receipt = TransactionReceipt.model_validate(data)
        except httpx.HTTPStatusError as e:
            raise TransactionError(
                f"Escrow rejected {action} for channel {channel_id}: {e}"
            ) from e
        except httpx.RequestError as e:
            raise TransactionError(f"Could not connect to escrow gateway: {e}") from e
        except ValueError as e:
            raise TransactionError(f"Invalid transaction receipt: {e}") from e

        if not receipt.status:
            raise TransactionError(
                f"Transaction {receipt.transaction_hash} for channel {channel_id} reverted"
            )
        logger.debug(
            "Escrow %s for channel %s mined in block %s",
            action,
            channel_id,
            receipt.block_number,
        )
        return receipt

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncEscrowClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
