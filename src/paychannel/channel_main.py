"""Sync a single payment channel and print its reconciled state."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from .application.payment_channel import PaymentChannel
from .domain.entities import ChannelState
from .domain.errors import PaymentChannelError
from .domain.protocols import ChannelStateServiceProtocol, EscrowContractProtocol
from .envs.client_env import Settings, get_settings
from .infrastructure.accounts.private_key_account import PrivateKeyAccount
from .infrastructure.escrow.escrow_client import AsyncEscrowClient
from .infrastructure.state_service.channel_state_client import AsyncChannelStateClient

logger = logging.getLogger(__name__)


def build_payment_channel(
    settings: Settings,
    channel_id: int,
    escrow: EscrowContractProtocol,
    state_service: ChannelStateServiceProtocol,
) -> PaymentChannel:
    """Wire a `PaymentChannel` to the configured account and collaborators."""
    account = PrivateKeyAccount.from_pem(settings.channel_private_key_pem)
    return PaymentChannel(
        channel_id,
        account,
        escrow,
        state_service,
        sync_timeout=settings.sync_timeout,
    )


async def sync_channel(settings: Settings, channel_id: int) -> ChannelState:
    async with AsyncEscrowClient(
        settings.escrow_base_url, timeout=settings.request_timeout
    ) as escrow, AsyncChannelStateClient(
        settings.state_service_base_url, timeout=settings.request_timeout
    ) as state_service:
        channel = build_payment_channel(settings, channel_id, escrow, state_service)
        return await channel.sync()


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="paychannel-sync",
        description="Reconcile a payment channel's escrow and state service views.",
    )
    parser.add_argument("channel_id", type=int, help="On-chain channel id")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        settings = get_settings()
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        state = asyncio.run(sync_channel(settings, args.channel_id))
    except PaymentChannelError as e:
        logger.error("Sync of channel %s failed: %s", args.channel_id, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Invalid channel: {e}", file=sys.stderr)
        return 2

    print(state.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
