"""Client-side reconciliation of escrow-backed payment channel state."""

from .application.payment_channel import PaymentChannel
from .domain.entities import ChannelState
from .domain.errors import (
    AuthenticationError,
    PaymentChannelError,
    StateFetchError,
    SyncTimeoutError,
    TransactionError,
)

__all__ = [
    "AuthenticationError",
    "ChannelState",
    "PaymentChannel",
    "PaymentChannelError",
    "StateFetchError",
    "SyncTimeoutError",
    "TransactionError",
]
