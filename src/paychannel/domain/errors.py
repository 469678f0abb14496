"""Error taxonomy for payment channel operations."""

from __future__ import annotations


class PaymentChannelError(Exception):
    """Base class for all payment channel failures."""


class StateFetchError(PaymentChannelError):
    """A state source was unreachable, timed out or returned malformed data."""


class SyncTimeoutError(StateFetchError):
    """A sync did not complete within its deadline."""


class AuthenticationError(PaymentChannelError):
    """The state service rejected the signed channel challenge."""


class TransactionError(PaymentChannelError):
    """An escrow transaction (funding or expiration change) failed."""
