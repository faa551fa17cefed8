"""
Pass Ledger

A serialized, in-memory ledger for a small access-and-reward economy:
- Capped-supply access tiers with reward bonuses for the upper tiers
- Time-bounded performances paying tier-multiplied rewards on check-in,
  at most once per holder per performance and behind a per-holder cooldown
- Numbered collectible series minted by burning reward currency
- A bind-once gate guarding every mint and burn of the reward currency
- Every operation commits fully or fails with no observable change
"""

from .codec import decode, encode
from .currency import RewardCurrency
from .models import (
    CollectibleDetails,
    CollectibleSeries,
    EventType,
    LedgerEvent,
    OwnedCollectibles,
    Performance,
    Tier,
    TierConfig,
)
from .service import LedgerService

__all__ = [
    "CollectibleDetails",
    "CollectibleSeries",
    "EventType",
    "LedgerEvent",
    "LedgerService",
    "OwnedCollectibles",
    "Performance",
    "RewardCurrency",
    "Tier",
    "TierConfig",
    "decode",
    "encode",
]
