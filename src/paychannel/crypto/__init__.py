from .channel_codec import (
    CHANNEL_ID_SIZE,
    MAX_CHANNEL_ID,
    decode_channel_id,
    decode_uint,
    encode_channel_id,
    encode_uint256,
    sign_typed_data,
    typed_data_bytes,
    verify_typed_data,
)
from .keys import (
    load_private_key_from_pem,
    load_public_key_from_der_b64,
    public_key_der_b64,
)

__all__ = [
    "CHANNEL_ID_SIZE",
    "MAX_CHANNEL_ID",
    "decode_channel_id",
    "decode_uint",
    "encode_channel_id",
    "encode_uint256",
    "load_private_key_from_pem",
    "load_public_key_from_der_b64",
    "public_key_der_b64",
    "sign_typed_data",
    "typed_data_bytes",
    "verify_typed_data",
]
