"""Daily revenue aggregation over completed orders."""

from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from decimal import Decimal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from front_of_house.config import LOCAL_TIMEZONE
from front_of_house.models import PAYMENT_METHODS, ZERO, DailySummary, Order
from front_of_house.orders import Clock, OrderLedger, utc_now

logger = logging.getLogger(__name__)


def configured_timezone() -> tzinfo | None:
    """The zone from config, or None for the system local zone."""
    if not LOCAL_TIMEZONE:
        return None
    try:
        return ZoneInfo(LOCAL_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        logger.warning("unknown timezone %r, using the system zone: %s", LOCAL_TIMEZONE, exc)
        return None


def calendar_day(moment: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of moment as seen in tz (system local zone when None)."""
    return moment.astimezone(tz).date()


def payment_share(summary: DailySummary, *methods: str) -> Decimal:
    """Percentage of the day's revenue paid with the given methods; 0 on a day without revenue."""
    if summary.total_revenue == 0:
        return ZERO
    paid = sum((summary.payment_methods.get(method, ZERO) for method in methods), ZERO)
    return paid * 100 / summary.total_revenue


class SummaryAggregator:
    """Read-only views over the ledger's completed orders."""

    def __init__(self, ledger: OrderLedger, tz: tzinfo | None = None, clock: Clock = utc_now) -> None:
        self._ledger = ledger
        self._tz = tz
        self._clock = clock

    def today(self) -> date:
        return calendar_day(self._clock(), self._tz)

    def _completed_on(self, order: Order, day: date) -> bool:
        return (
            order.status == "completed"
            and order.completed_at is not None
            and calendar_day(order.completed_at, self._tz) == day
        )

    def get_daily_summary(self, date_key: date | None = None) -> DailySummary:
        day = date_key if date_key is not None else self.today()
        day_orders = [order for order in self._ledger.orders if self._completed_on(order, day)]

        payment_methods = {method: ZERO for method in PAYMENT_METHODS}
        for order in day_orders:
            if order.payment_method is not None:
                payment_methods[order.payment_method] += order.total

        return DailySummary(
            date=day,
            total_revenue=sum((order.total for order in day_orders), ZERO),
            completed_orders=len(day_orders),
            payment_methods=payment_methods,
        )

    def get_available_dates(self) -> list[date]:
        """Distinct completion days, most recent first."""
        days = {
            calendar_day(order.completed_at, self._tz)
            for order in self._ledger.orders
            if order.status == "completed" and order.completed_at is not None
        }
        return sorted(days, reverse=True)
