"""Domain layer: value objects, errors and capability protocols."""

from .entities import (
    ChannelState,
    OffChainChannelState,
    OnChainChannel,
    TransactionReceipt,
)
from .errors import (
    AuthenticationError,
    PaymentChannelError,
    StateFetchError,
    SyncTimeoutError,
    TransactionError,
)
from .protocols import (
    AccountSigner,
    ChannelStateServiceProtocol,
    EscrowContractProtocol,
    TypedValue,
)

__all__ = [
    "AccountSigner",
    "AuthenticationError",
    "ChannelState",
    "ChannelStateServiceProtocol",
    "EscrowContractProtocol",
    "OffChainChannelState",
    "OnChainChannel",
    "PaymentChannelError",
    "StateFetchError",
    "SyncTimeoutError",
    "TransactionError",
    "TransactionReceipt",
    "TypedValue",
]
