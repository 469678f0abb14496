"""Capability protocols consumed by the payment channel.

These define the contracts of the collaborators a `PaymentChannel` is built
from. Passing them in explicitly keeps the channel testable with in-memory
implementations.
"""

from __future__ import annotations

from typing import Protocol, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    # Avoid circular imports by only importing types during type checking
    from ..application.shared.channel_state_payloads import (
        ChannelStateReply,
        ChannelStateRequest,
    )
    from .entities import OnChainChannel, TransactionReceipt

# (solidity type name, value), e.g. ("uint256", 42)
TypedValue = Tuple[str, int]


class AccountSigner(Protocol):
    """An account able to sign typed values with its private key."""

    @property
    def public_key_der_b64(self) -> str:
        """Public key of the account in DER base64 format."""
        ...

    def sign_typed_data(self, *values: TypedValue) -> bytes:
        """Sign the encoding of `values` and return the raw signature bytes."""
        ...


class EscrowContractProtocol(Protocol):
    """Escrow contract holding the channel deposits.

    Reads raise `StateFetchError`; transactions raise `TransactionError`.
    """

    async def read_channel(self, channel_id: int) -> "OnChainChannel":
        """Read the committed channel record: nonce, expiration and value."""
        ...

    async def channel_add_funds(
        self, account: AccountSigner, channel_id: int, amount: int
    ) -> "TransactionReceipt":
        ...

    async def channel_extend(
        self, account: AccountSigner, channel_id: int, expiration: int
    ) -> "TransactionReceipt":
        ...

    async def channel_extend_and_add_funds(
        self,
        account: AccountSigner,
        channel_id: int,
        expiration: int,
        amount: int,
    ) -> "TransactionReceipt":
        ...


class ChannelStateServiceProtocol(Protocol):
    """Off-chain service tracking the latest amount signed under a nonce."""

    async def get_channel_state(
        self, request: "ChannelStateRequest"
    ) -> "ChannelStateReply":
        """Return the service's current nonce and signed amount.

        Raises:
            AuthenticationError: If the signed challenge is rejected.
            StateFetchError: If the service is unreachable or replies garbage.
        """
        ...
