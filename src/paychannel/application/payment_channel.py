"""Payment channel reconciling escrow contract state with the state service."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from ..crypto.channel_codec import encode_channel_id
from ..domain.entities import (
    ChannelState,
    OffChainChannelState,
    OnChainChannel,
    TransactionReceipt,
)
from ..domain.errors import PaymentChannelError, StateFetchError, SyncTimeoutError
from ..domain.protocols import (
    AccountSigner,
    ChannelStateServiceProtocol,
    EscrowContractProtocol,
)
from .shared.channel_state_payloads import (
    ChannelStateReply,
    build_channel_state_request,
    decode_channel_state_reply,
)

logger = logging.getLogger(__name__)


class PaymentChannel:
    """A unidirectional payment channel held by the client.

    The channel owns its `ChannelState`. Each successful `sync()` replaces
    it wholesale; a failed sync leaves the previous state untouched.
    """

    def __init__(
        self,
        channel_id: int,
        account: AccountSigner,
        escrow: EscrowContractProtocol,
        state_service: ChannelStateServiceProtocol,
        *,
        sync_timeout: Optional[float] = None,
    ) -> None:
        # Rejects ids that cannot be sent in the 4-byte challenge
        encode_channel_id(channel_id)
        self._channel_id = channel_id
        self._account = account
        self._escrow = escrow
        self._state_service = state_service
        self._sync_timeout = sync_timeout
        self._state = ChannelState.unsynced()
        self._sync_lock = asyncio.Lock()

    @property
    def channel_id(self) -> int:
        return self._channel_id

    @property
    def account(self) -> AccountSigner:
        return self._account

    @property
    def state(self) -> ChannelState:
        return self._state

    async def add_funds(self, amount: int) -> TransactionReceipt:
        """Add funds to the channel's escrowed deposit."""
        logger.debug("Adding %s to PaymentChannel[id: %s]", amount, self._channel_id)
        return await self._escrow.channel_add_funds(
            self._account, self._channel_id, amount
        )

    async def extend_expiration(self, expiration: int) -> TransactionReceipt:
        """Extend the channel expiry, given as a block number."""
        logger.debug(
            "Extending PaymentChannel[id: %s] expiration to %s",
            self._channel_id,
            expiration,
        )
        return await self._escrow.channel_extend(
            self._account, self._channel_id, expiration
        )

    async def extend_and_add_funds(
        self, expiration: int, amount: int
    ) -> TransactionReceipt:
        logger.debug(
            "Extending PaymentChannel[id: %s] expiration to %s and adding %s",
            self._channel_id,
            expiration,
            amount,
        )
        return await self._escrow.channel_extend_and_add_funds(
            self._account, self._channel_id, expiration, amount
        )

    async def sync(self, timeout: Optional[float] = None) -> ChannelState:
        """Fetch on-chain and off-chain state and merge them into a new state.

        Syncs on the same channel are serialized; a caller arriving while one
        is in flight waits for it and then runs its own reconciliation.

        Args:
            timeout: Deadline in seconds for the whole reconciliation. Falls
                back to the channel's `sync_timeout`.

        Returns:
            The new channel state, also available as `state`.

        Raises:
            StateFetchError: A source was unreachable or returned bad data.
            SyncTimeoutError: The deadline passed, including time spent queued
                behind another sync on this channel.
            AuthenticationError: The state service rejected the challenge.
        """
        if timeout is None:
            timeout = self._sync_timeout

        try:
            state = await asyncio.wait_for(self._locked_sync(), timeout)
        except asyncio.TimeoutError as e:
            logger.error(
                "Timed out syncing PaymentChannel[id: %s] after %ss",
                self._channel_id,
                timeout,
            )
            raise SyncTimeoutError(
                f"Sync of channel {self._channel_id} timed out after {timeout}s"
            ) from e

        if state.has_nonce_skew:
            logger.info(
                "PaymentChannel[id: %s] state service nonce %s differs from on-chain nonce %s",
                self._channel_id,
                state.current_nonce,
                state.nonce,
            )
        logger.debug(
            "PaymentChannel[id: %s] synced: %s", self._channel_id, state.model_dump()
        )
        return state

    async def _locked_sync(self) -> ChannelState:
        # The deadline covers time spent queued behind another sync
        async with self._sync_lock:
            logger.debug("Syncing PaymentChannel[id: %s] state", self._channel_id)
            state = await self._fetch_merged_state()
            self._state = state
        return state

    async def _fetch_merged_state(self) -> ChannelState:
        on_chain_task = asyncio.ensure_future(self._read_on_chain())
        off_chain_task = asyncio.ensure_future(self._read_off_chain())
        try:
            on_chain, off_chain = await asyncio.gather(on_chain_task, off_chain_task)
        except BaseException:
            on_chain_task.cancel()
            off_chain_task.cancel()
            raise
        return ChannelState.merge(on_chain, off_chain)

    async def _read_on_chain(self) -> OnChainChannel:
        try:
            record = await self._escrow.read_channel(self._channel_id)
        except PaymentChannelError:
            logger.error(
                "Failed to read PaymentChannel[id: %s] from escrow contract",
                self._channel_id,
            )
            raise
        try:
            return OnChainChannel.model_validate(record)
        except ValidationError as e:
            raise StateFetchError(
                f"Escrow contract returned malformed record for channel {self._channel_id}: {e}"
            ) from e

    async def _read_off_chain(self) -> OffChainChannelState:
        request = build_channel_state_request(self._account, self._channel_id)

        logger.debug(
            "Fetching latest PaymentChannel[id: %s] state from state service",
            self._channel_id,
        )
        try:
            reply = await self._state_service.get_channel_state(request)
        except PaymentChannelError:
            logger.error(
                "Failed to fetch latest PaymentChannel[id: %s] state from state service",
                self._channel_id,
            )
            raise
        if not isinstance(reply, ChannelStateReply):
            raise StateFetchError(
                f"State service returned malformed reply for channel {self._channel_id}"
            )

        off_chain = decode_channel_state_reply(reply)
        logger.debug(
            "Latest PaymentChannel[id: %s] state: last_signed_amount=%s, nonce=%s",
            self._channel_id,
            off_chain.current_signed_amount,
            off_chain.current_nonce,
        )
        return off_chain
