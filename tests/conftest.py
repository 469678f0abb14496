"""Shared pytest fixtures for payment channel tests."""

from __future__ import annotations

from typing import Callable

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from paychannel.application.payment_channel import PaymentChannel
from paychannel.infrastructure.accounts.private_key_account import PrivateKeyAccount
from tests.fixtures import (
    CHANNEL_ID,
    InMemoryChannelStateService,
    InMemoryEscrowContract,
)


@pytest.fixture
def sender_key_pair() -> tuple[ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey]:
    """Generate the channel sender's key pair."""
    private_key = ec.generate_private_key(ec.SECP256R1())
    return private_key, private_key.public_key()


@pytest.fixture
def sender_private_key_pem(
    sender_key_pair: tuple[ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey],
) -> str:
    """Get the sender private key as PEM string."""
    private_key, _ = sender_key_pair
    pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return pem.decode("utf-8")


@pytest.fixture
def sender_account(
    sender_key_pair: tuple[ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey],
) -> PrivateKeyAccount:
    private_key, _ = sender_key_pair
    return PrivateKeyAccount(private_key)


@pytest.fixture
def escrow(sender_account: PrivateKeyAccount) -> InMemoryEscrowContract:
    """Escrow holding channel CHANNEL_ID opened by the sender account."""
    contract = InMemoryEscrowContract()
    contract.open_channel(
        CHANNEL_ID,
        sender_account.public_key_der_b64,
        nonce=0,
        expiration=900000,
        value=1000,
    )
    return contract


@pytest.fixture
def state_service(sender_account: PrivateKeyAccount) -> InMemoryChannelStateService:
    """State service that knows channel CHANNEL_ID and its sender."""
    service = InMemoryChannelStateService()
    service.register_channel(CHANNEL_ID, sender_account.public_key)
    return service


@pytest.fixture
def make_channel(
    sender_account: PrivateKeyAccount,
    escrow: InMemoryEscrowContract,
    state_service: InMemoryChannelStateService,
) -> Callable[..., PaymentChannel]:
    def _make(channel_id: int = CHANNEL_ID, **kwargs: object) -> PaymentChannel:
        return PaymentChannel(
            channel_id, sender_account, escrow, state_service, **kwargs
        )

    return _make


@pytest.fixture
def channel(make_channel: Callable[..., PaymentChannel]) -> PaymentChannel:
    return make_channel()
