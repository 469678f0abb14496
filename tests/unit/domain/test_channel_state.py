"""Unit tests for the ChannelState value object."""

import pytest
from pydantic import ValidationError

from paychannel.domain import ChannelState, OffChainChannelState, OnChainChannel


def _merge(
    *,
    nonce: int = 0,
    current_nonce: int = 0,
    expiration: int = 0,
    total: int = 0,
    signed: int = 0,
) -> ChannelState:
    return ChannelState.merge(
        OnChainChannel(nonce=nonce, expiration=expiration, value=total),
        OffChainChannelState(current_nonce=current_nonce, current_signed_amount=signed),
    )


class TestChannelStateMerge:
    """Test merging on-chain and off-chain state."""

    @pytest.mark.parametrize(
        "total, signed",
        [
            (0, 0),
            (1000, 0),
            (1000, 1000),
            (1000, 999),
            (10**18, 25 * 10**16),
            (10**40 + 7, 10**40 + 3),
        ],
    )
    def test_available_is_exact_difference(self, total: int, signed: int) -> None:
        state = _merge(total=total, signed=signed)
        assert state.available_amount == total - signed
        assert isinstance(state.available_amount, int)

    def test_overspent_channel_reports_negative_available(self) -> None:
        state = _merge(total=100, signed=150)
        assert state.available_amount == -50

    def test_fields_are_taken_from_their_sources(self) -> None:
        state = _merge(nonce=3, current_nonce=2, expiration=900000, total=10, signed=4)
        assert state.nonce == 3
        assert state.current_nonce == 2
        assert state.expiration == 900000
        assert state.total_amount == 10
        assert state.last_signed_amount == 4


class TestChannelStateSkew:
    """Test nonce skew reporting."""

    def test_lagging_service_nonce_is_reported(self) -> None:
        state = _merge(nonce=5, current_nonce=4)
        assert state.nonce == 5
        assert state.current_nonce == 4
        assert state.nonce_skew == 1
        assert state.has_nonce_skew is True

    def test_matching_nonces_have_no_skew(self) -> None:
        state = _merge(nonce=5, current_nonce=5)
        assert state.nonce_skew == 0
        assert state.has_nonce_skew is False


class TestChannelStateValueObject:
    """Test immutability and serialization."""

    def test_unsynced_state_is_zero(self) -> None:
        state = ChannelState.unsynced()
        assert state.nonce == 0
        assert state.last_signed_amount == 0
        assert state.available_amount == 0

    def test_state_is_frozen(self) -> None:
        state = ChannelState.unsynced()
        with pytest.raises(ValidationError):
            state.nonce = 1  # type: ignore[misc]

    def test_dump_includes_available_amount(self) -> None:
        dumped = _merge(total=10, signed=3).model_dump()
        assert dumped["available_amount"] == 7

    def test_on_chain_record_rejects_negative_values(self) -> None:
        with pytest.raises(ValidationError):
            OnChainChannel(nonce=0, expiration=0, value=-1)

    def test_on_chain_record_accepts_decimal_strings(self) -> None:
        record = OnChainChannel.model_validate(
            {"nonce": "3", "expiration": 900000, "value": "1000000000000000000"}
        )
        assert record.value == 10**18
