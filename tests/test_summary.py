from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from front_of_house.models import MenuItem
from front_of_house.orders import OrderLedger
from front_of_house import summary as summary_module
from front_of_house.summary import SummaryAggregator, calendar_day, configured_timezone, payment_share


def priced(amount: str) -> MenuItem:
    return MenuItem(id=f"item-{amount}", name=f"Item {amount}", category="misc", price=Decimal(amount))


def complete(ledger: OrderLedger, amount: str, method: str | None) -> str:
    order_id = ledger.create_order("t")
    ledger.add_item_to_order(order_id, priced(amount))
    ledger.update_order_status(order_id, "completed", method)
    return order_id


def test_empty_day_is_all_zeros(store, clock):
    summary = SummaryAggregator(OrderLedger(store, clock=clock), tz=timezone.utc, clock=clock)

    result = summary.get_daily_summary(date(2024, 3, 15))
    assert result.date == date(2024, 3, 15)
    assert result.total_revenue == 0
    assert result.completed_orders == 0
    assert result.payment_methods == {"cash": 0, "card": 0, "pix": 0}
    assert payment_share(result, "cash") == 0


def test_orders_without_payment_method_count_but_are_not_bucketed(store, clock):
    ledger = OrderLedger(store, clock=clock)
    complete(ledger, "10.00", "cash")
    complete(ledger, "20.00", "card")
    complete(ledger, "15.00", None)

    result = SummaryAggregator(ledger, tz=timezone.utc, clock=clock).get_daily_summary(date(2024, 3, 15))

    assert result.total_revenue == Decimal("45.00")
    assert result.completed_orders == 3
    assert result.payment_methods == {
        "cash": Decimal("10.00"),
        "card": Decimal("20.00"),
        "pix": Decimal("0.00"),
    }


def test_open_orders_and_other_days_are_excluded(store, clock):
    ledger = OrderLedger(store, clock=clock)
    complete(ledger, "10.00", "pix")
    open_id = ledger.create_order("t")
    ledger.add_item_to_order(open_id, priced("99.00"))
    parked = ledger.create_order("t")
    ledger.add_item_to_order(parked, priced("50.00"))
    ledger.update_order_status(parked, "standby")
    clock.advance(days=1)
    complete(ledger, "7.00", "cash")

    summary = SummaryAggregator(ledger, tz=timezone.utc, clock=clock)
    first_day = summary.get_daily_summary(date(2024, 3, 15))
    assert first_day.total_revenue == Decimal("10.00")
    assert first_day.payment_methods["pix"] == Decimal("10.00")

    assert summary.get_daily_summary().total_revenue == Decimal("7.00")


def test_completed_order_stays_counted_after_later_status_calls(store, clock):
    ledger = OrderLedger(store, clock=clock)
    order_id = complete(ledger, "12.00", "card")
    ledger.update_order_status(order_id, "active")
    ledger.update_order_status(order_id, "standby")

    result = SummaryAggregator(ledger, tz=timezone.utc, clock=clock).get_daily_summary(date(2024, 3, 15))
    assert result.completed_orders == 1
    assert result.total_revenue == Decimal("12.00")


def test_available_dates_are_distinct_and_newest_first(store, clock):
    ledger = OrderLedger(store, clock=clock)
    for _ in range(5):
        complete(ledger, "1.00", "cash")
    clock.advance(days=2)
    complete(ledger, "1.00", "cash")
    clock.advance(days=-1)
    complete(ledger, "1.00", None)
    ledger.create_order("still-open")

    summary = SummaryAggregator(ledger, tz=timezone.utc, clock=clock)
    assert summary.get_available_dates() == [date(2024, 3, 17), date(2024, 3, 16), date(2024, 3, 15)]


def test_available_dates_reflect_new_completions(store, clock):
    ledger = OrderLedger(store, clock=clock)
    summary = SummaryAggregator(ledger, tz=timezone.utc, clock=clock)
    assert summary.get_available_dates() == []

    complete(ledger, "3.00", "pix")
    assert summary.get_available_dates() == [date(2024, 3, 15)]


def test_calendar_day_uses_the_given_timezone():
    late_evening_in_sao_paulo = datetime(2024, 3, 16, 1, 30, tzinfo=timezone.utc)
    brt = timezone(timedelta(hours=-3))

    assert calendar_day(late_evening_in_sao_paulo, timezone.utc) == date(2024, 3, 16)
    assert calendar_day(late_evening_in_sao_paulo, brt) == date(2024, 3, 15)


def test_payment_share(store, clock):
    ledger = OrderLedger(store, clock=clock)
    complete(ledger, "30.00", "cash")
    complete(ledger, "50.00", "card")
    complete(ledger, "20.00", "pix")

    result = SummaryAggregator(ledger, tz=timezone.utc, clock=clock).get_daily_summary()
    assert payment_share(result, "cash") == Decimal("30")
    assert payment_share(result, "card", "pix") == Decimal("70")


def test_unknown_configured_timezone_falls_back_to_system_zone(monkeypatch, caplog):
    monkeypatch.setattr(summary_module, "LOCAL_TIMEZONE", "Mars/Olympus_Mons")

    assert configured_timezone() is None
    assert "unknown timezone 'Mars/Olympus_Mons'" in caplog.text


def test_configured_timezone_resolves_iana_names(monkeypatch):
    monkeypatch.setattr(summary_module, "LOCAL_TIMEZONE", "UTC")
    assert configured_timezone() is not None
