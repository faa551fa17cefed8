import logging

from . import codec
from .currency import RewardCurrency
from .exceptions import (
    InvalidPrice,
    InvalidSupply,
    LocatorRequired,
    NameRequired,
    SeriesInactive,
    SeriesSoldOut,
    UnknownSeries,
    UnknownToken,
)
from .models import (
    CollectibleDetails,
    CollectibleRedeemed,
    CollectibleSeries,
    OwnedCollectibles,
    SeriesCreated,
)
from .storage import InMemoryStorage

logger = logging.getLogger(__name__)


class CollectibleRegistry:
    def __init__(
        self,
        storage: InMemoryStorage,
        currency: RewardCurrency,
        burner: str,
        item_path: str = "/items/",
    ):
        self.storage = storage
        self.currency = currency
        self.burner = burner
        self.item_path = item_path

    def create_series(
        self,
        name: str,
        metadata_base: str,
        unit_price: int,
        max_items: int,
        activate_now: bool,
    ) -> SeriesCreated:
        if unit_price <= 0:
            raise InvalidPrice(f"Unit price must be positive, got {unit_price}")
        if max_items <= 0:
            raise InvalidSupply(f"Max items must be positive, got {max_items}")
        if not name:
            raise NameRequired("Series name is required")
        if not metadata_base:
            raise LocatorRequired("Series metadata base is required")

        series_id = self.storage.next_series_id
        self.storage.series[series_id] = CollectibleSeries(
            id=series_id,
            name=name,
            metadata_base=metadata_base,
            unit_price=unit_price,
            max_items=max_items,
            active=activate_now,
        )
        self.storage.next_series_id += 1
        return SeriesCreated(series_id=series_id, name=name, max_items=max_items)

    def get_series(self, series_id: int) -> CollectibleSeries:
        series = self.storage.series.get(series_id)
        if series is None or series.unit_price == 0:
            raise UnknownSeries(f"Series {series_id} not found")
        return series

    def set_series_active(self, series_id: int, active: bool) -> CollectibleSeries:
        series = self.get_series(series_id)
        series.active = active
        logger.info("Series %s %s", series_id, "activated" if active else "paused")
        return series

    def redeem(self, holder: str, series_id: int) -> CollectibleRedeemed:
        series = self.get_series(series_id)
        if not series.active:
            raise SeriesInactive(f"Series {series_id} is not open for redemption")
        if series.is_sold_out():
            raise SeriesSoldOut(f"Series {series_id} sold out ({series.minted}/{series.max_items})")

        item = series.next_item
        token_id = codec.encode(series_id, item)
        # Debit precedes every write to the series.
        self.currency.debit(self.burner, holder, series.unit_price)
        series.next_item += 1
        self.storage.grant(holder, token_id)

        return CollectibleRedeemed(holder=holder, token_id=token_id, series_id=series_id, item=item)

    def details_of(self, token_id: int) -> CollectibleDetails:
        series_id, item = codec.decode(token_id)
        series = self.storage.series.get(series_id)
        if series is None or series.unit_price == 0:
            raise UnknownToken(f"Token {token_id} does not belong to a known series")
        return CollectibleDetails(
            series_id=series_id,
            item=item,
            name=series.name,
            edition=item,
            max_items=series.max_items,
            metadata_uri=f"{series.metadata_base}{self.item_path}{item}",
        )

    def owned_collectibles_of(self, holder: str) -> OwnedCollectibles:
        # Linear in the number of minted items across all series.
        owned = OwnedCollectibles()
        for series_id in self.storage.series_ids():
            series = self.storage.series.get(series_id)
            if series is None:
                continue
            for item in range(1, series.next_item):
                token_id = codec.encode(series_id, item)
                if self.storage.balance_of(holder, token_id) > 0:
                    owned.token_ids.append(token_id)
                    owned.series_ids.append(series_id)
                    owned.items.append(item)
        return owned
