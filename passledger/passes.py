import logging

from .currency import RewardCurrency
from .exceptions import InvalidPrice, InvalidSupply, InvalidTier, SupplyExhausted, WrongPayment
from .models import TIER_MULTIPLIERS, TIER_PRIORITY, PassPurchased, Tier, TierConfig
from .storage import InMemoryStorage

logger = logging.getLogger(__name__)


def parse_tier(value: int) -> Tier:
    if isinstance(value, bool):
        raise InvalidTier(f"Unknown tier {value!r}")
    try:
        return Tier(value)
    except ValueError:
        raise InvalidTier(f"Unknown tier {value!r}; expected one of {[t.value for t in Tier]}") from None


class PassManager:
    """Capped-supply access tiers and the reward bonuses that come with them."""

    def __init__(
        self,
        storage: InMemoryStorage,
        currency: RewardCurrency,
        minter: str,
        tier_bonuses: dict[Tier, int],
    ):
        self.storage = storage
        self.currency = currency
        self.minter = minter
        self.tier_bonuses = tier_bonuses

    def configure(self, tier: int, price: int, max_supply: int) -> TierConfig:
        tier = parse_tier(tier)
        if price <= 0:
            raise InvalidPrice(f"Tier price must be positive, got {price}")
        if max_supply <= 0:
            raise InvalidSupply(f"Tier max supply must be positive, got {max_supply}")

        # Reconfiguring restarts the supply window; units already issued stay with holders.
        config = TierConfig(tier=tier, price=price, max_supply=max_supply, issued=0)
        self.storage.tiers[tier] = config
        logger.info("Configured tier %s: price=%s max_supply=%s", tier.value, price, max_supply)
        return config

    def purchase(self, buyer: str, tier: int, payment: int) -> PassPurchased:
        tier = parse_tier(tier)
        config = self.storage.tiers[tier]
        if payment != config.price:
            raise WrongPayment(
                f"Tier {tier.value} costs exactly {config.price}, got {payment}",
                details={"tier": tier.value, "price": config.price, "payment": payment},
            )
        if config.is_sold_out():
            raise SupplyExhausted(f"Tier {tier.value} sold out ({config.issued}/{config.max_supply})")

        bonus = self.tier_bonuses.get(tier, 0)
        if bonus:
            self.currency.credit(self.minter, buyer, bonus)
        config.issued += 1
        self.storage.grant(buyer, tier.value)
        self.storage.treasury += payment

        return PassPurchased(buyer=buyer, tier=tier, bonus=bonus)

    def tier_info(self, tier: int) -> TierConfig:
        return self.storage.tiers[parse_tier(tier)].model_copy()

    def tiers_of(self, holder: str) -> dict[int, int]:
        return {
            tier.value: self.storage.balance_of(holder, tier.value)
            for tier in Tier
            if self.storage.balance_of(holder, tier.value) > 0
        }

    def has_any_tier(self, holder: str) -> bool:
        return any(self.storage.balance_of(holder, tier.value) > 0 for tier in Tier)

    def multiplier_of(self, holder: str) -> int:
        for tier in TIER_PRIORITY:
            if self.storage.balance_of(holder, tier.value) > 0:
                return TIER_MULTIPLIERS[tier]
        return 0
