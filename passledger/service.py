import logging
import threading
import time
from functools import wraps
from typing import Callable, Optional

from . import codec
from .attendance import AttendanceEngine
from .collectibles import CollectibleRegistry
from .config import Settings, get_settings
from .currency import RewardCurrency
from .exceptions import InvalidAuthority, LedgerError, NotAuthorized
from .models import (
    Attended,
    CollectibleDetails,
    CollectibleRedeemed,
    CollectibleSeries,
    HolderSummary,
    LedgerEvent,
    OwnedCollectibles,
    PassPurchased,
    Performance,
    Tier,
    TierConfig,
    Withdrawn,
)
from .passes import PassManager
from .storage import InMemoryStorage

logger = logging.getLogger(__name__)

Listener = Callable[[LedgerEvent], None]


def system_clock() -> int:
    return int(time.time())


def serialized(method):
    """Run one ledger operation at a time and log rejections."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            try:
                return method(self, *args, **kwargs)
            except LedgerError as e:
                logger.warning("%s rejected [%s]: %s", method.__name__, e.code, e)
                raise

    return wrapper


class LedgerService:
    def __init__(
        self,
        owner: Optional[str] = None,
        storage: Optional[InMemoryStorage] = None,
        currency: Optional[RewardCurrency] = None,
        clock: Optional[Callable[[], int]] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.address = self.settings.ledger_address
        self.clock = clock or system_clock
        self.storage = storage or InMemoryStorage(
            owner=owner or self.settings.owner_address,
            series_id_offset=self.settings.series_id_offset,
        )
        self.currency = currency or RewardCurrency(
            name=self.settings.currency_name,
            symbol=self.settings.currency_symbol,
        )
        if not self.currency.is_bound:
            self.currency.bind(self.address)

        self.passes = PassManager(
            self.storage,
            self.currency,
            minter=self.address,
            tier_bonuses={
                Tier.TIER2: self.settings.vip_bonus,
                Tier.TIER3: self.settings.backstage_bonus,
            },
        )
        self.attendance = AttendanceEngine(
            self.storage,
            self.currency,
            self.passes,
            minter=self.address,
            clock=self.clock,
            cooldown_seconds=self.settings.checkin_cooldown_seconds,
        )
        self.collectibles = CollectibleRegistry(
            self.storage,
            self.currency,
            burner=self.address,
            item_path=self.settings.metadata_item_path,
        )

        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

    # Roles

    @property
    def owner(self) -> str:
        return self.storage.owner

    @property
    def organizer(self) -> str:
        return self.storage.organizer

    @serialized
    def set_organizer(self, caller: str, address: str) -> None:
        self._require_owner(caller)
        if not address:
            raise InvalidAuthority("Organizer address is required")
        self.storage.organizer = address
        logger.info("Organizer set to %s", address)

    @serialized
    def withdraw(self, caller: str, target: str) -> Withdrawn:
        self._require_owner(caller)
        if not target:
            raise InvalidAuthority("Withdrawal target is required")
        amount = self.storage.treasury
        self.storage.treasury = 0
        self.storage.payouts[target] = self.storage.payouts.get(target, 0) + amount
        return self._commit(Withdrawn(target=target, amount=amount))

    # Passes

    @serialized
    def configure(self, caller: str, tier: int, price: int, max_supply: int) -> TierConfig:
        self._require_organizer(caller)
        return self.passes.configure(tier, price, max_supply).model_copy()

    @serialized
    def purchase(self, caller: str, tier: int, payment: int) -> PassPurchased:
        return self._commit(self.passes.purchase(caller, tier, payment))

    @serialized
    def tier_info(self, tier: int) -> TierConfig:
        return self.passes.tier_info(tier)

    @serialized
    def has_any_tier(self, holder: str) -> bool:
        return self.passes.has_any_tier(holder)

    @serialized
    def multiplier_of(self, holder: str) -> int:
        return self.passes.multiplier_of(holder)

    # Performances

    @serialized
    def schedule(self, caller: str, start_time: int, duration: int, base_reward: int) -> int:
        self._require_organizer(caller)
        event = self._commit(self.attendance.schedule(start_time, duration, base_reward))
        return event.performance_id

    @serialized
    def get_performance(self, performance_id: int) -> Performance:
        return self.attendance.get_performance(performance_id)

    @serialized
    def is_active(self, performance_id: int) -> bool:
        return self.attendance.is_active(performance_id)

    @serialized
    def attend(self, caller: str, performance_id: int) -> Attended:
        return self._commit(self.attendance.attend(caller, performance_id))

    # Collectibles

    @serialized
    def create_series(
        self,
        caller: str,
        name: str,
        metadata_base: str,
        unit_price: int,
        max_items: int,
        activate_now: bool = True,
    ) -> int:
        self._require_organizer(caller)
        event = self._commit(
            self.collectibles.create_series(name, metadata_base, unit_price, max_items, activate_now)
        )
        return event.series_id

    @serialized
    def set_series_active(self, caller: str, series_id: int, active: bool) -> CollectibleSeries:
        self._require_organizer(caller)
        return self.collectibles.set_series_active(series_id, active).model_copy()

    @serialized
    def get_series(self, series_id: int) -> CollectibleSeries:
        return self.collectibles.get_series(series_id).model_copy()

    @serialized
    def redeem(self, caller: str, series_id: int) -> CollectibleRedeemed:
        return self._commit(self.collectibles.redeem(caller, series_id))

    @serialized
    def details_of(self, token_id: int) -> CollectibleDetails:
        return self.collectibles.details_of(token_id)

    @serialized
    def owned_collectibles_of(self, holder: str) -> OwnedCollectibles:
        return self.collectibles.owned_collectibles_of(holder)

    @staticmethod
    def encode(series_id: int, item: int) -> int:
        return codec.encode(series_id, item)

    @staticmethod
    def decode(token_id: int) -> tuple[int, int]:
        return codec.decode(token_id)

    # Balances

    @serialized
    def balance_of(self, holder: str, asset_id: int) -> int:
        return self.storage.balance_of(holder, asset_id)

    @serialized
    def reward_balance_of(self, holder: str) -> int:
        return self.currency.balance_of(holder)

    @serialized
    def holder_summary(self, holder: str) -> HolderSummary:
        return HolderSummary(
            holder=holder,
            tiers=self.passes.tiers_of(holder),
            multiplier=self.passes.multiplier_of(holder),
            reward_balance=self.currency.balance_of(holder),
            last_checkin_at=self.attendance.last_checkin_of(holder),
            collectibles=self.collectibles.owned_collectibles_of(holder),
        )

    # Notifications

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    @serialized
    def events(self, since: int = 0) -> list[LedgerEvent]:
        return [e for e in self.storage.events if e.sequence > since]

    def _commit(self, event):
        event = event.model_copy(
            update={"sequence": len(self.storage.events) + 1, "emitted_at": self.clock()}
        )
        self.storage.events.append(event)
        logger.info(
            "%s #%s %s",
            event.event_type.value,
            event.sequence,
            event.model_dump(exclude={"event_type", "sequence"}),
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed on event #%s", listener, event.sequence)
        return event

    def _require_owner(self, caller: str) -> None:
        if caller != self.storage.owner:
            raise NotAuthorized(f"{caller or '<empty>'} is not the owner")

    def _require_organizer(self, caller: str) -> None:
        if caller != self.storage.organizer:
            raise NotAuthorized(f"{caller or '<empty>'} is not the organizer")
