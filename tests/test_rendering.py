from __future__ import annotations

from datetime import date
from decimal import Decimal

from front_of_house.models import DailySummary, Table
from front_of_house.rendering import format_money, format_summary, format_table_label


def test_format_money_pads_to_cents():
    assert format_money(Decimal("8.5")) == "R$ 8.50"
    assert format_money(Decimal("0")) == "R$ 0.00"


def test_summary_of_empty_day_renders_zero_percentages():
    summary = DailySummary(
        date=date(2024, 3, 15),
        total_revenue=Decimal("0"),
        completed_orders=0,
        payment_methods={"cash": Decimal("0"), "card": Decimal("0"), "pix": Decimal("0")},
    )

    plain = format_summary(summary, is_today=False).plain
    assert "15/03/2024" in plain
    assert "R$ 0.00" in plain
    assert "0.0% of total" in plain


def test_summary_splits_cash_from_electronic():
    summary = DailySummary(
        date=date(2024, 3, 15),
        total_revenue=Decimal("40"),
        completed_orders=3,
        payment_methods={"cash": Decimal("10"), "card": Decimal("20"), "pix": Decimal("10")},
    )

    plain = format_summary(summary, is_today=True).plain
    assert plain.startswith("Today")
    assert "25.0% of total" in plain
    assert "R$ 30.00" in plain
    assert "75.0% of total" in plain


def test_table_label_shows_status():
    label = format_table_label(Table(id="t", number=3, status="reserved")).plain
    assert "Table 3" in label
    assert "Reserved" in label
