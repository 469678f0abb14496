"""Unit tests for channel id / uint encodings and typed-value signatures."""

import pytest
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec

from paychannel.crypto import (
    MAX_CHANNEL_ID,
    decode_channel_id,
    decode_uint,
    encode_channel_id,
    encode_uint256,
    sign_typed_data,
    typed_data_bytes,
    verify_typed_data,
)


class TestDecodeUint:
    """Test decode_uint on big-endian byte strings."""

    @pytest.mark.parametrize("data", [b"", b"\x00", b"\x00\x00\x00\x00"])
    def test_empty_and_zero_bytes_decode_to_zero(self, data: bytes) -> None:
        assert decode_uint(data) == 0

    @pytest.mark.parametrize(
        "data, expected",
        [
            (b"\x01", 1),
            (b"\xff\xff\xff\xff", 2**32 - 1),
            (b"\x01" + b"\x00" * 19 + b"\x01", 2**160 + 1),
            (b"\x00\x00\x01\x00", 256),
        ],
    )
    def test_decodes_exact_integer(self, data: bytes, expected: int) -> None:
        assert decode_uint(data) == expected

    def test_wider_than_uint256_keeps_precision(self) -> None:
        value = 2**300 + 12345
        data = value.to_bytes(38, "big")
        assert decode_uint(data) == value


class TestChannelIdEncoding:
    """Test the 4-byte channel id encoding used in state requests."""

    @pytest.mark.parametrize("channel_id", [0, 1, 255, 256, 65536, 2**32 - 2])
    def test_round_trip(self, channel_id: int) -> None:
        encoded = encode_channel_id(channel_id)
        assert len(encoded) == 4
        assert decode_channel_id(encoded) == channel_id

    def test_big_endian_layout(self) -> None:
        assert encode_channel_id(0x01020304) == b"\x01\x02\x03\x04"

    def test_max_channel_id_is_accepted(self) -> None:
        assert encode_channel_id(MAX_CHANNEL_ID) == b"\xff\xff\xff\xff"

    @pytest.mark.parametrize("channel_id", [-1, 2**32, 2**64])
    def test_out_of_range_raises(self, channel_id: int) -> None:
        with pytest.raises(ValueError, match="does not fit"):
            encode_channel_id(channel_id)

    def test_decode_rejects_wrong_length(self) -> None:
        with pytest.raises(ValueError, match="must be 4 bytes"):
            decode_channel_id(b"\x00\x01")


class TestTypedData:
    """Test uint256 typed-value encoding and signing."""

    def test_uint256_is_32_bytes_big_endian(self) -> None:
        assert encode_uint256(1) == b"\x00" * 31 + b"\x01"

    def test_uint256_out_of_range_raises(self) -> None:
        with pytest.raises(ValueError, match="uint256"):
            encode_uint256(2**256)
        with pytest.raises(ValueError, match="uint256"):
            encode_uint256(-1)

    def test_values_are_concatenated_in_order(self) -> None:
        data = typed_data_bytes(("uint256", 1), ("uint256", 2))
        assert data == encode_uint256(1) + encode_uint256(2)

    def test_unsupported_type_raises(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            typed_data_bytes(("address", 1))

    def test_signature_verifies_for_same_values(self) -> None:
        private_key = ec.generate_private_key(ec.SECP256R1())
        signature = sign_typed_data(private_key, ("uint256", 42))
        verify_typed_data(private_key.public_key(), signature, ("uint256", 42))

    def test_signature_does_not_verify_for_other_values(self) -> None:
        private_key = ec.generate_private_key(ec.SECP256R1())
        signature = sign_typed_data(private_key, ("uint256", 42))
        with pytest.raises(InvalidSignature):
            verify_typed_data(private_key.public_key(), signature, ("uint256", 43))
