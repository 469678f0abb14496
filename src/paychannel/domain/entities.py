"""Payment channel domain entities.

Amounts and nonces are plain Python ints, which are arbitrary precision, so
values such as wei-denominated balances never lose precision.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class OnChainChannel(BaseModel):
    """Channel record committed in the escrow contract."""

    model_config = ConfigDict(frozen=True)

    nonce: int = Field(ge=0)
    expiration: int = Field(ge=0)
    value: int = Field(ge=0)
    sender: Optional[str] = None
    recipient: Optional[str] = None


class OffChainChannelState(BaseModel):
    """Latest signed state as reported by the channel state service."""

    model_config = ConfigDict(frozen=True)

    current_nonce: int = Field(ge=0)
    current_signed_amount: int = Field(ge=0)


class TransactionReceipt(BaseModel):
    """Receipt of a state-changing escrow transaction."""

    model_config = ConfigDict(frozen=True)

    transaction_hash: str
    block_number: int
    status: bool = True


class ChannelState(BaseModel):
    """Merged view of a channel's on-chain and off-chain state.

    Instances are immutable; a sync replaces the whole object.
    `available_amount` is reported as computed and is negative when the
    service reports more signed value than the chain holds.
    """

    model_config = ConfigDict(frozen=True)

    nonce: int = 0
    current_nonce: int = 0
    expiration: int = 0
    total_amount: int = 0
    last_signed_amount: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def available_amount(self) -> int:
        return self.total_amount - self.last_signed_amount

    @property
    def nonce_skew(self) -> int:
        """How many settlements the service is behind the chain."""
        return self.nonce - self.current_nonce

    @property
    def has_nonce_skew(self) -> bool:
        return self.current_nonce != self.nonce

    @classmethod
    def unsynced(cls) -> "ChannelState":
        """Zero-valued state held by a channel before its first sync."""
        return cls()

    @classmethod
    def merge(
        cls, on_chain: OnChainChannel, off_chain: OffChainChannelState
    ) -> "ChannelState":
        """Combine the committed contract record with the service's signed state."""
        return cls(
            nonce=on_chain.nonce,
            current_nonce=off_chain.current_nonce,
            expiration=on_chain.expiration,
            total_amount=on_chain.value,
            last_signed_amount=off_chain.current_signed_amount,
        )
