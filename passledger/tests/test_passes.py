"""
Unit Tests for Pass & Supply Management

Tests cover:
1. Tier configuration and validation
2. Purchase flow, exact payment, supply caps
3. Tier bonuses in reward currency
4. Multiplier resolution
"""

import pytest

from passledger.exceptions import (
    InvalidPrice,
    InvalidSupply,
    InvalidTier,
    NotAuthorized,
    SupplyExhausted,
    WrongPayment,
)
from passledger.models import Tier


# Test constants
ORGANIZER = "0xorganizer"
ALICE = "0xalice"
BOB = "0xbob"
PRICE = 10**17


class TestConfigure:
    """Tests for tier configuration."""

    def test_configure_tier(self, service):
        """Test configuring a tier."""
        config = service.configure(ORGANIZER, 1, PRICE, 500)

        assert config.tier == Tier.TIER1
        assert config.price == PRICE
        assert config.max_supply == 500
        assert config.issued == 0
        assert service.tier_info(1).remaining == 500

    def test_configure_requires_organizer(self, service):
        """Test that only the organizer can configure tiers."""
        with pytest.raises(NotAuthorized):
            service.configure(ALICE, 1, PRICE, 500)

        assert service.tier_info(1).price == 0

    @pytest.mark.parametrize("tier", [0, 4, -1])
    def test_configure_invalid_tier(self, service, tier):
        """Test that non-enumerated tiers are rejected."""
        with pytest.raises(InvalidTier):
            service.configure(ORGANIZER, tier, PRICE, 10)

    @pytest.mark.parametrize("price", [0, -5])
    def test_configure_invalid_price(self, service, price):
        """Test that non-positive prices are rejected."""
        with pytest.raises(InvalidPrice):
            service.configure(ORGANIZER, 2, price, 10)

    @pytest.mark.parametrize("max_supply", [0, -1])
    def test_configure_invalid_supply(self, service, max_supply):
        """Test that non-positive supplies are rejected."""
        with pytest.raises(InvalidSupply):
            service.configure(ORGANIZER, 2, PRICE, max_supply)

    def test_reconfigure_resets_issued(self, service):
        """Test that reconfiguring restarts the supply window but keeps sold passes."""
        service.configure(ORGANIZER, 1, PRICE, 1)
        service.purchase(ALICE, 1, PRICE)

        config = service.configure(ORGANIZER, 1, PRICE, 1)

        assert config.issued == 0
        assert service.balance_of(ALICE, 1) == 1
        # A new unit can be sold again
        service.purchase(BOB, 1, PRICE)
        assert service.tier_info(1).issued == 1


class TestPurchase:
    """Tests for the purchase flow."""

    def test_purchase_general_admission(self, service):
        """Test buying a tier 1 pass grants no bonus."""
        service.configure(ORGANIZER, 1, PRICE, 10)

        event = service.purchase(ALICE, 1, PRICE)

        assert event.buyer == ALICE
        assert event.tier == Tier.TIER1
        assert event.bonus == 0
        assert service.balance_of(ALICE, 1) == 1
        assert service.tier_info(1).issued == 1
        assert service.reward_balance_of(ALICE) == 0

    def test_vip_purchase_and_supply_cap(self, service):
        """Test tier 2 with max supply 1: first buyer gets the bonus, second is turned away."""
        service.configure(ORGANIZER, 2, PRICE, 1)

        event = service.purchase(ALICE, 2, PRICE)

        assert event.bonus == 50
        assert service.reward_balance_of(ALICE) == 50
        assert service.balance_of(ALICE, 2) == 1
        assert service.tier_info(2).issued == 1

        with pytest.raises(SupplyExhausted):
            service.purchase(BOB, 2, PRICE)

        assert service.balance_of(BOB, 2) == 0
        assert service.reward_balance_of(BOB) == 0
        assert service.tier_info(2).issued == 1

    def test_backstage_purchase_bonus(self, service):
        """Test tier 3 credits the larger bonus."""
        service.configure(ORGANIZER, 3, PRICE * 5, 3)

        service.purchase(ALICE, 3, PRICE * 5)

        assert service.reward_balance_of(ALICE) == 100

    @pytest.mark.parametrize("payment", [0, PRICE - 1, PRICE + 1])
    def test_purchase_requires_exact_payment(self, service, payment):
        """Test that under- and overpayment are both rejected."""
        service.configure(ORGANIZER, 1, PRICE, 10)

        with pytest.raises(WrongPayment):
            service.purchase(ALICE, 1, payment)

        assert service.tier_info(1).issued == 0
        assert service.balance_of(ALICE, 1) == 0

    def test_purchase_unconfigured_tier_fails(self, service):
        """Test that an unconfigured tier cannot be bought."""
        with pytest.raises(WrongPayment):
            service.purchase(ALICE, 3, PRICE)
        with pytest.raises(SupplyExhausted):
            service.purchase(ALICE, 3, 0)

    def test_purchase_invalid_tier(self, service):
        """Test that unknown tiers are rejected."""
        with pytest.raises(InvalidTier):
            service.purchase(ALICE, 7, PRICE)

    def test_issued_never_exceeds_supply(self, service):
        """Test that the issued count stops at the cap."""
        service.configure(ORGANIZER, 1, PRICE, 3)

        buyers = [f"0xbuyer{i}" for i in range(5)]
        sold = 0
        for buyer in buyers:
            try:
                service.purchase(buyer, 1, PRICE)
                sold += 1
            except SupplyExhausted:
                pass

        assert sold == 3
        assert service.tier_info(1).issued == 3


class TestMultiplier:
    """Tests for tier ownership reads."""

    def test_no_pass(self, service):
        """Test a holder without passes."""
        assert service.has_any_tier(ALICE) is False
        assert service.multiplier_of(ALICE) == 0

    def test_highest_tier_wins(self, service):
        """Test that owning several tiers resolves to the highest multiplier."""
        for tier in (1, 2, 3):
            service.configure(ORGANIZER, tier, PRICE, 10)

        service.purchase(ALICE, 1, PRICE)
        assert service.has_any_tier(ALICE) is True
        assert service.multiplier_of(ALICE) == 1

        service.purchase(ALICE, 3, PRICE)
        assert service.multiplier_of(ALICE) == 3

        service.purchase(ALICE, 2, PRICE)
        assert service.multiplier_of(ALICE) == 3

        service.purchase(BOB, 2, PRICE)
        assert service.multiplier_of(BOB) == 2
