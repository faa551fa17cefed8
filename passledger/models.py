from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Tier(int, Enum):
    TIER1 = 1
    TIER2 = 2
    TIER3 = 3


# Highest privilege first; multiplier_of walks this order.
TIER_PRIORITY = (Tier.TIER3, Tier.TIER2, Tier.TIER1)

TIER_MULTIPLIERS = {
    Tier.TIER1: 1,
    Tier.TIER2: 2,
    Tier.TIER3: 3,
}


class EventType(str, Enum):
    PASS_PURCHASED = "PASS_PURCHASED"
    PERFORMANCE_SCHEDULED = "PERFORMANCE_SCHEDULED"
    ATTENDED = "ATTENDED"
    SERIES_CREATED = "SERIES_CREATED"
    COLLECTIBLE_REDEEMED = "COLLECTIBLE_REDEEMED"
    WITHDRAWN = "WITHDRAWN"


class TierConfig(BaseModel):
    tier: Tier
    price: int = 0
    max_supply: int = 0
    issued: int = 0

    model_config = ConfigDict(from_attributes=True)

    @property
    def remaining(self) -> int:
        return max(0, self.max_supply - self.issued)

    def is_sold_out(self) -> bool:
        return self.issued >= self.max_supply


class Performance(BaseModel):
    id: int
    start_time: int
    end_time: int
    base_reward: int

    model_config = ConfigDict(from_attributes=True, frozen=True)

    def is_live_at(self, now: int) -> bool:
        return self.start_time != 0 and self.start_time <= now <= self.end_time


class CollectibleSeries(BaseModel):
    id: int
    name: str
    metadata_base: str
    unit_price: int
    max_items: int
    next_item: int = 1
    active: bool = True

    model_config = ConfigDict(from_attributes=True)

    @property
    def minted(self) -> int:
        return self.next_item - 1

    def is_sold_out(self) -> bool:
        return self.minted >= self.max_items


class CollectibleDetails(BaseModel):
    series_id: int
    item: int
    name: str
    edition: int
    max_items: int
    metadata_uri: str


class OwnedCollectibles(BaseModel):
    token_ids: list[int] = Field(default_factory=list)
    series_ids: list[int] = Field(default_factory=list)
    items: list[int] = Field(default_factory=list)


class HolderSummary(BaseModel):
    holder: str
    tiers: dict[int, int]
    multiplier: int
    reward_balance: int
    last_checkin_at: Optional[int] = None
    collectibles: OwnedCollectibles


# Notifications

class LedgerEvent(BaseModel):
    event_type: EventType
    sequence: int = 0
    emitted_at: int = 0

    model_config = ConfigDict(frozen=True)


class PassPurchased(LedgerEvent):
    event_type: EventType = EventType.PASS_PURCHASED
    buyer: str
    tier: Tier
    bonus: int = 0


class PerformanceScheduled(LedgerEvent):
    event_type: EventType = EventType.PERFORMANCE_SCHEDULED
    performance_id: int
    start_time: int
    end_time: int


class Attended(LedgerEvent):
    event_type: EventType = EventType.ATTENDED
    holder: str
    performance_id: int
    reward: int


class SeriesCreated(LedgerEvent):
    event_type: EventType = EventType.SERIES_CREATED
    series_id: int
    name: str
    max_items: int


class CollectibleRedeemed(LedgerEvent):
    event_type: EventType = EventType.COLLECTIBLE_REDEEMED
    holder: str
    token_id: int
    series_id: int
    item: int


class Withdrawn(LedgerEvent):
    event_type: EventType = EventType.WITHDRAWN
    target: str
    amount: int


# Requests

class ConfigureTierRequest(BaseModel):
    price: int
    max_supply: int

    model_config = ConfigDict(json_schema_extra={
        "example": {"price": 100000000000000000, "max_supply": 500}
    })


class PurchaseRequest(BaseModel):
    payment: int


class ScheduleRequest(BaseModel):
    start_time: int = Field(..., description="UNIX seconds, strictly in the future")
    duration: int = Field(..., description="Seconds")
    base_reward: int

    model_config = ConfigDict(json_schema_extra={
        "example": {"start_time": 1767225600, "duration": 7200, "base_reward": 100}
    })


class CreateSeriesRequest(BaseModel):
    name: str
    metadata_base: str
    unit_price: int
    max_items: int
    activate_now: bool = True

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "name": "Opening Night Poster",
            "metadata_base": "ipfs://bafy-poster",
            "unit_price": 250,
            "max_items": 100,
            "activate_now": True,
        }
    })


class SetSeriesActiveRequest(BaseModel):
    active: bool


class SetOrganizerRequest(BaseModel):
    address: str


class WithdrawRequest(BaseModel):
    target: str


# Responses

class ScheduleResponse(BaseModel):
    performance: Performance
    message: str


class SeriesResponse(BaseModel):
    series: CollectibleSeries
    message: str


class IdentifierResponse(BaseModel):
    token_id: int
    series_id: int
    item: int
