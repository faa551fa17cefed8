"""
Collectible identifier codec.

A collectible is addressed in the ownership ledger by one integer that packs
the series id into the high half and the item number into the low half:

    token_id = (series_id << ITEM_BITS) | item

Both halves are ITEM_BITS wide, so the mapping is a bijection over
[0, MAX_HALF] x [0, MAX_HALF].
"""

from .exceptions import InvalidIdentifier

ITEM_BITS = 128
MAX_HALF = (1 << ITEM_BITS) - 1
MAX_TOKEN_ID = (1 << (2 * ITEM_BITS)) - 1


def _check_half(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidIdentifier(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > MAX_HALF:
        raise InvalidIdentifier(f"{name} {value} is outside [0, {MAX_HALF}]")


def encode(series_id: int, item: int) -> int:
    _check_half("series_id", series_id)
    _check_half("item", item)
    return (series_id << ITEM_BITS) | item


def decode(token_id: int) -> tuple[int, int]:
    if isinstance(token_id, bool) or not isinstance(token_id, int):
        raise InvalidIdentifier(f"token_id must be an integer, got {type(token_id).__name__}")
    if token_id < 0 or token_id > MAX_TOKEN_ID:
        raise InvalidIdentifier(f"token_id {token_id} is outside [0, {MAX_TOKEN_ID}]")
    return token_id >> ITEM_BITS, token_id & MAX_HALF
