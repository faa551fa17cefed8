import logging
from typing import Optional

from .exceptions import (
    AlreadyBound,
    InsufficientBalance,
    InvalidAmount,
    InvalidAuthority,
    NotAuthorized,
)

logger = logging.getLogger(__name__)


class RewardCurrency:
    """Fungible reward balances guarded by a single, bind-once minter."""

    def __init__(self, name: str = "Reward Token", symbol: str = "RWD"):
        self.name = name
        self.symbol = symbol
        self.balances: dict[str, int] = {}
        self.total_supply = 0
        self._binder: Optional[str] = None

    @property
    def binder(self) -> Optional[str]:
        return self._binder

    @property
    def is_bound(self) -> bool:
        return self._binder is not None

    def bind(self, authority: str) -> None:
        if self._binder is not None:
            raise AlreadyBound(f"{self.symbol} is already bound to {self._binder}")
        if not authority:
            raise InvalidAuthority("Cannot bind to an empty authority")
        self._binder = authority
        logger.info("%s bound to %s", self.symbol, authority)

    def balance_of(self, holder: str) -> int:
        return self.balances.get(holder, 0)

    def credit(self, caller: str, holder: str, amount: int) -> int:
        self._check_call(caller, amount)
        new_balance = self.balance_of(holder) + amount
        self.balances[holder] = new_balance
        self.total_supply += amount
        return new_balance

    def debit(self, caller: str, holder: str, amount: int) -> int:
        self._check_call(caller, amount)
        current = self.balance_of(holder)
        if current < amount:
            raise InsufficientBalance(
                f"{holder} holds {current} {self.symbol}, needs {amount}",
                details={"holder": holder, "balance": current, "required": amount},
            )
        self.balances[holder] = current - amount
        self.total_supply -= amount
        return current - amount

    def _check_call(self, caller: str, amount: int) -> None:
        if self._binder is None or caller != self._binder:
            raise NotAuthorized(f"{caller or '<empty>'} may not mint or burn {self.symbol}")
        if amount < 0:
            raise InvalidAmount(f"Amount must be non-negative, got {amount}")
