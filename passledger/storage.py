from .models import CollectibleSeries, LedgerEvent, Performance, Tier, TierConfig


class InMemoryStorage:
    def __init__(self, owner: str, series_id_offset: int = 100):
        self.owner = owner
        self.organizer = owner

        self.tiers: dict[Tier, TierConfig] = {tier: TierConfig(tier=tier) for tier in Tier}
        # holder -> asset id -> quantity; asset ids are tier ids or encoded collectible ids
        self.holdings: dict[str, dict[int, int]] = {}

        self.performances: list[Performance] = []
        self.attendance: set[tuple[int, str]] = set()
        self.last_checkin: dict[str, int] = {}

        self.series: dict[int, CollectibleSeries] = {}
        self.series_id_offset = series_id_offset
        self.next_series_id = series_id_offset

        self.treasury = 0
        self.payouts: dict[str, int] = {}

        self.events: list[LedgerEvent] = []

    def balance_of(self, holder: str, asset_id: int) -> int:
        return self.holdings.get(holder, {}).get(asset_id, 0)

    def grant(self, holder: str, asset_id: int, quantity: int = 1) -> None:
        assets = self.holdings.setdefault(holder, {})
        assets[asset_id] = assets.get(asset_id, 0) + quantity

    def series_ids(self) -> range:
        return range(self.series_id_offset, self.next_series_id)
