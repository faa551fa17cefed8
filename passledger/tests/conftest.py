import pytest

from passledger.config import Settings
from passledger.service import LedgerService

OWNER = "0xowner"
ORGANIZER = "0xorganizer"

START = 1_700_000_000
HOUR = 3600


class FakeClock:
    def __init__(self, now: int = START):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def settings():
    return Settings(_env_file=None, checkin_cooldown_seconds=HOUR, vip_bonus=50, backstage_bonus=100)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(settings, clock):
    service = LedgerService(owner=OWNER, clock=clock, settings=settings)
    service.set_organizer(OWNER, ORGANIZER)
    return service
