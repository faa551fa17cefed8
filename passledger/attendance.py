import logging
from typing import Callable, Optional

from .currency import RewardCurrency
from .exceptions import (
    AlreadyAttended,
    CooldownActive,
    InvalidDuration,
    InvalidReward,
    NoPass,
    NotActive,
    StartNotFuture,
    UnknownPerformance,
)
from .models import Attended, Performance, PerformanceScheduled
from .passes import PassManager
from .storage import InMemoryStorage

logger = logging.getLogger(__name__)


class AttendanceEngine:
    """
    Time-bounded performances and reward-paying check-ins.

    The cooldown is tracked per holder across every performance, so a holder
    who checks into one show cannot check into another until it has elapsed.
    """

    def __init__(
        self,
        storage: InMemoryStorage,
        currency: RewardCurrency,
        passes: PassManager,
        minter: str,
        clock: Callable[[], int],
        cooldown_seconds: int,
    ):
        self.storage = storage
        self.currency = currency
        self.passes = passes
        self.minter = minter
        self.clock = clock
        self.cooldown_seconds = cooldown_seconds

    def schedule(self, start_time: int, duration: int, base_reward: int) -> PerformanceScheduled:
        now = self.clock()
        if start_time <= now:
            raise StartNotFuture(
                f"Start time {start_time} is not after current time {now}",
                details={"start_time": start_time, "now": now},
            )
        if duration <= 0:
            raise InvalidDuration(f"Duration must be positive, got {duration}")
        if base_reward < 0:
            raise InvalidReward(f"Base reward must be non-negative, got {base_reward}")

        performance = Performance(
            id=len(self.storage.performances),
            start_time=start_time,
            end_time=start_time + duration,
            base_reward=base_reward,
        )
        self.storage.performances.append(performance)
        return PerformanceScheduled(
            performance_id=performance.id,
            start_time=performance.start_time,
            end_time=performance.end_time,
        )

    def get_performance(self, performance_id: int) -> Performance:
        performance = self._lookup(performance_id)
        if performance is None:
            raise UnknownPerformance(f"Performance {performance_id} not found")
        return performance

    def is_active(self, performance_id: int) -> bool:
        performance = self._lookup(performance_id)
        return performance is not None and performance.is_live_at(self.clock())

    def has_attended(self, performance_id: int, holder: str) -> bool:
        return (performance_id, holder) in self.storage.attendance

    def last_checkin_of(self, holder: str) -> Optional[int]:
        return self.storage.last_checkin.get(holder)

    def next_checkin_at(self, holder: str) -> Optional[int]:
        last = self.last_checkin_of(holder)
        return None if last is None else last + self.cooldown_seconds

    def attend(self, holder: str, performance_id: int) -> Attended:
        now = self.clock()
        performance = self._lookup(performance_id)
        if performance is None or not performance.is_live_at(now):
            raise NotActive(f"Performance {performance_id} is not live")
        if not self.passes.has_any_tier(holder):
            raise NoPass(f"{holder} holds no access pass")
        if self.has_attended(performance_id, holder):
            raise AlreadyAttended(f"{holder} already checked into performance {performance_id}")
        ready_at = self.next_checkin_at(holder)
        if ready_at is not None and now < ready_at:
            raise CooldownActive(
                f"{holder} can check in again at {ready_at}",
                details={"ready_at": ready_at, "now": now},
            )

        reward = performance.base_reward * self.passes.multiplier_of(holder)
        self.currency.credit(self.minter, holder, reward)
        self.storage.attendance.add((performance_id, holder))
        self.storage.last_checkin[holder] = now

        return Attended(holder=holder, performance_id=performance_id, reward=reward)

    def _lookup(self, performance_id: int) -> Optional[Performance]:
        if 0 <= performance_id < len(self.storage.performances):
            return self.storage.performances[performance_id]
        return None
