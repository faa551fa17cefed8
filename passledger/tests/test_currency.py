"""
Unit Tests for the Reward Currency Gate

Tests cover:
1. One-time binding
2. Mint/burn authorization
3. Balance checks on debit
"""

import pytest

from passledger.currency import RewardCurrency
from passledger.exceptions import (
    AlreadyBound,
    InsufficientBalance,
    InvalidAmount,
    InvalidAuthority,
    NotAuthorized,
)


# Test constants
MINTER = "0xledger"
ALICE = "0xalice"


class TestBinding:
    """Tests for the bind-once minter."""

    def test_bind_sets_binder(self):
        """Test that the first bind succeeds."""
        currency = RewardCurrency()
        assert not currency.is_bound

        currency.bind(MINTER)

        assert currency.is_bound
        assert currency.binder == MINTER

    def test_second_bind_fails_for_any_authority(self):
        """Test that every bind after the first fails with AlreadyBound."""
        currency = RewardCurrency()
        currency.bind(MINTER)

        for authority in (MINTER, "0xother", ""):
            with pytest.raises(AlreadyBound):
                currency.bind(authority)

        assert currency.binder == MINTER

    def test_bind_empty_authority_fails(self):
        """Test that binding to the empty identity is rejected."""
        currency = RewardCurrency()

        with pytest.raises(InvalidAuthority):
            currency.bind("")

        assert not currency.is_bound
        # Still bindable after the rejected attempt
        currency.bind(MINTER)
        assert currency.binder == MINTER


class TestMintAndBurn:
    """Tests for credit and debit."""

    def test_credit_and_debit_by_binder(self):
        """Test that the binder can credit and debit."""
        currency = RewardCurrency()
        currency.bind(MINTER)

        assert currency.credit(MINTER, ALICE, 300) == 300
        assert currency.debit(MINTER, ALICE, 120) == 180

        assert currency.balance_of(ALICE) == 180
        assert currency.total_supply == 180

    def test_credit_before_bind_fails(self):
        """Test that nobody can mint while the gate is unbound."""
        currency = RewardCurrency()

        with pytest.raises(NotAuthorized):
            currency.credit(MINTER, ALICE, 10)

        assert currency.balance_of(ALICE) == 0

    def test_non_binder_cannot_mint_or_burn(self):
        """Test that any caller other than the binder is rejected."""
        currency = RewardCurrency()
        currency.bind(MINTER)
        currency.credit(MINTER, ALICE, 100)

        with pytest.raises(NotAuthorized):
            currency.credit(ALICE, ALICE, 1_000)
        with pytest.raises(NotAuthorized):
            currency.debit(ALICE, ALICE, 100)

        assert currency.balance_of(ALICE) == 100

    def test_debit_more_than_balance_fails(self):
        """Test that overdrawing leaves the balance untouched."""
        currency = RewardCurrency()
        currency.bind(MINTER)
        currency.credit(MINTER, ALICE, 50)

        with pytest.raises(InsufficientBalance) as exc_info:
            currency.debit(MINTER, ALICE, 51)

        assert exc_info.value.details["balance"] == 50
        assert currency.balance_of(ALICE) == 50
        assert currency.total_supply == 50

    def test_negative_amount_fails(self):
        """Test that negative amounts are rejected."""
        currency = RewardCurrency()
        currency.bind(MINTER)

        with pytest.raises(InvalidAmount):
            currency.credit(MINTER, ALICE, -1)
