"""Infrastructure layer: HTTP clients and key-backed accounts."""

from .accounts.private_key_account import PrivateKeyAccount
from .escrow.escrow_client import AsyncEscrowClient
from .state_service.channel_state_client import AsyncChannelStateClient

__all__ = ["AsyncChannelStateClient", "AsyncEscrowClient", "PrivateKeyAccount"]
