from __future__ import annotations

from cryptography.hazmat.primitives.asymmetric import ec

from ...crypto.channel_codec import sign_typed_data
from ...crypto.keys import load_private_key_from_pem, public_key_der_b64
from ...domain.protocols import TypedValue


class PrivateKeyAccount:
    """`AccountSigner` backed by a local EC private key."""

    def __init__(self, private_key: ec.EllipticCurvePrivateKey) -> None:
        self._private_key = private_key
        self._public_key_der_b64 = public_key_der_b64(private_key.public_key())

    @classmethod
    def from_pem(cls, pem_str: str) -> "PrivateKeyAccount":
        return cls(load_private_key_from_pem(pem_str))

    @property
    def public_key(self) -> ec.EllipticCurvePublicKey:
        return self._private_key.public_key()

    @property
    def public_key_der_b64(self) -> str:
        return self._public_key_der_b64

    def sign_typed_data(self, *values: TypedValue) -> bytes:
        return sign_typed_data(self._private_key, *values)
