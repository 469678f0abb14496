"""Messages exchanged with the channel state service.

The in-process messages carry raw bytes; the wire payloads carry the same
fields base64-encoded so they travel as JSON.
"""

from __future__ import annotations

import base64
import binascii

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec
from pydantic import BaseModel, ConfigDict

from ...crypto.channel_codec import (
    decode_channel_id,
    decode_uint,
    encode_channel_id,
    verify_typed_data,
)
from ...domain.entities import OffChainChannelState
from ...domain.errors import AuthenticationError
from ...domain.protocols import AccountSigner


class ChannelStateRequest(BaseModel):
    """Signed challenge proving control of the channel's sender account."""

    model_config = ConfigDict(frozen=True)

    channel_id: bytes
    signature: bytes


class ChannelStateReply(BaseModel):
    """Service reply: big-endian unsigned integers of arbitrary length."""

    model_config = ConfigDict(frozen=True)

    current_nonce: bytes
    current_signed_amount: bytes


class ChannelStateRequestPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    channel_id_b64: str
    signature_b64: str


class ChannelStateResponsePayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    current_nonce_b64: str
    current_signed_amount_b64: str


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")


def _b64decode(field: str, value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Field {field} is not valid base64: {e}") from e


def build_channel_state_request(
    signer: AccountSigner, channel_id: int
) -> ChannelStateRequest:
    """Sign the channel id as a uint256 and pair it with its 4-byte encoding."""
    channel_id_bytes = encode_channel_id(channel_id)
    signature = signer.sign_typed_data(("uint256", channel_id))
    return ChannelStateRequest(channel_id=channel_id_bytes, signature=signature)


def serialize_channel_state_request(
    request: ChannelStateRequest,
) -> ChannelStateRequestPayload:
    return ChannelStateRequestPayload(
        channel_id_b64=_b64encode(request.channel_id),
        signature_b64=_b64encode(request.signature),
    )


def deserialize_channel_state_request(
    payload: ChannelStateRequestPayload,
) -> ChannelStateRequest:
    return ChannelStateRequest(
        channel_id=_b64decode("channel_id_b64", payload.channel_id_b64),
        signature=_b64decode("signature_b64", payload.signature_b64),
    )


def serialize_channel_state_reply(
    reply: ChannelStateReply,
) -> ChannelStateResponsePayload:
    return ChannelStateResponsePayload(
        current_nonce_b64=_b64encode(reply.current_nonce),
        current_signed_amount_b64=_b64encode(reply.current_signed_amount),
    )


def deserialize_channel_state_reply(
    payload: ChannelStateResponsePayload,
) -> ChannelStateReply:
    return ChannelStateReply(
        current_nonce=_b64decode("current_nonce_b64", payload.current_nonce_b64),
        current_signed_amount=_b64decode(
            "current_signed_amount_b64", payload.current_signed_amount_b64
        ),
    )


def decode_channel_state_reply(reply: ChannelStateReply) -> OffChainChannelState:
    """Decode the reply's byte fields into integers."""
    return OffChainChannelState(
        current_nonce=decode_uint(reply.current_nonce),
        current_signed_amount=decode_uint(reply.current_signed_amount),
    )


def verify_channel_state_request(
    sender_public_key: ec.EllipticCurvePublicKey, request: ChannelStateRequest
) -> int:
    """Check a state request against the channel's registered sender.

    Returns:
        The channel id the request was signed for.

    Raises:
        AuthenticationError: If the channel id is malformed or the signature
            was not produced by the sender's key.
    """
    try:
        channel_id = decode_channel_id(request.channel_id)
    except ValueError as e:
        raise AuthenticationError(f"Malformed channel id in request: {e}") from e
    try:
        verify_typed_data(sender_public_key, request.signature, ("uint256", channel_id))
    except InvalidSignature as e:
        raise AuthenticationError(
            f"Invalid signature for channel {channel_id} state request"
        ) from e
    return channel_id
