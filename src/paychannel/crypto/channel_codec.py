"""Integer encodings and the typed-value signing scheme for channel messages."""

from __future__ import annotations

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from ..domain.protocols import TypedValue

CHANNEL_ID_SIZE = 4
UINT256_SIZE = 32
MAX_CHANNEL_ID = 2 ** (8 * CHANNEL_ID_SIZE) - 1
MAX_UINT256 = 2 ** (8 * UINT256_SIZE) - 1


def encode_channel_id(channel_id: int) -> bytes:
    """Encode a channel id as a 4-byte big-endian unsigned integer."""
    if not 0 <= channel_id <= MAX_CHANNEL_ID:
        raise ValueError(
            f"Channel id {channel_id} does not fit in {CHANNEL_ID_SIZE} bytes"
        )
    return channel_id.to_bytes(CHANNEL_ID_SIZE, "big")


def decode_channel_id(data: bytes) -> int:
    if len(data) != CHANNEL_ID_SIZE:
        raise ValueError(
            f"Channel id must be {CHANNEL_ID_SIZE} bytes, got {len(data)}"
        )
    return int.from_bytes(data, "big")


def decode_uint(data: bytes) -> int:
    """Decode a variable-length big-endian unsigned integer. Empty input is zero."""
    return int.from_bytes(data, "big")


def encode_uint256(value: int) -> bytes:
    if not 0 <= value <= MAX_UINT256:
        raise ValueError(f"Value {value} is out of uint256 range")
    return value.to_bytes(UINT256_SIZE, "big")


def typed_data_bytes(*values: TypedValue) -> bytes:
    """Concatenate the encodings of typed values, in order."""
    encoded = bytearray()
    for type_name, value in values:
        if type_name != "uint256":
            raise ValueError(f"Unsupported typed value type: {type_name}")
        encoded += encode_uint256(value)
    return bytes(encoded)


def sign_typed_data(
    private_key: ec.EllipticCurvePrivateKey, *values: TypedValue
) -> bytes:
    """Sign typed values with ECDSA SHA256 and return the DER signature bytes."""
    return private_key.sign(typed_data_bytes(*values), ec.ECDSA(hashes.SHA256()))


def verify_typed_data(
    public_key: ec.EllipticCurvePublicKey, signature: bytes, *values: TypedValue
) -> None:
    """Verify a DER signature over typed values. Raises InvalidSignature on failure."""
    public_key.verify(signature, typed_data_bytes(*values), ec.ECDSA(hashes.SHA256()))
