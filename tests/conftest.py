from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from front_of_house.coordinator import FrontOfHouse
from front_of_house.models import MenuItem
from front_of_house.persistence import MemoryStore


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def foh(store, clock) -> FrontOfHouse:
    return FrontOfHouse.from_store(store, clock=clock, tz=timezone.utc)


@pytest.fixture
def burger() -> MenuItem:
    return MenuItem(id="burger", name="X-Burger", category="lanches", price=Decimal("15.00"))


@pytest.fixture
def soda() -> MenuItem:
    return MenuItem(id="soda", name="Coca-Cola", category="bebidas", price=Decimal("5.00"))


@pytest.fixture
def skewer() -> MenuItem:
    return MenuItem(id="skewer", name="Espeto de Carne", category="espetos", price=Decimal("8.50"))
