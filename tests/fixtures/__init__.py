"""Test fixtures for in-memory implementations."""

from .in_memory_escrow import InMemoryEscrowContract
from .in_memory_state_service import InMemoryChannelStateService, uint_to_bytes

# Channel opened by the sender account in the shared fixtures
CHANNEL_ID = 42

__all__ = [
    "CHANNEL_ID",
    "InMemoryChannelStateService",
    "InMemoryEscrowContract",
    "uint_to_bytes",
]
