from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from front_of_house import printer as printer_module
from front_of_house.models import MenuItem, Order, OrderItem
from front_of_house.printer import SEPARATOR, bill_lines, print_order_bill


def make_order(payment_method=None) -> Order:
    order = Order(
        id="o1",
        table_id="t1",
        created_at=datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc),
        items=[
            OrderItem(MenuItem("1", "Espeto de Carne", "espetos", Decimal("8.5")), 2),
            OrderItem(MenuItem("5", "Coca-Cola", "bebidas", Decimal("5")), 1),
        ],
        payment_method=payment_method,
    )
    order.recompute_total()
    return order


def test_bill_lines_layout():
    printed_at = datetime(2024, 3, 15, 13, 45, tzinfo=timezone.utc)
    rows = bill_lines(make_order("pix"), 4, printed_at=printed_at)

    assert rows[0] == ("Table 4", "")
    assert rows[1] == (printed_at.astimezone().strftime("%d/%m/%Y %H:%M"), "")
    assert rows[2:] == [
        (SEPARATOR, ""),
        ("2x Espeto de Carne", "17.00"),
        ("1x Coca-Cola", "5.00"),
        (SEPARATOR, ""),
        ("TOTAL", "22.00"),
        ("Paid: Pix", ""),
    ]


def test_bill_lines_without_table_or_payment():
    rows = bill_lines(make_order(), None)

    assert rows[0] == ("Bill", "")
    assert rows[-1] == ("TOTAL", "22.00")


def test_unplugged_printer_surfaces_as_runtime_error(monkeypatch):
    escpos_exceptions = pytest.importorskip("escpos.exceptions")
    escpos_printer = pytest.importorskip("escpos.printer")
    from PIL import ImageFont

    class UnpluggedUsb:
        def __init__(self, *args, **kwargs):
            pass

        def image(self, img):
            raise escpos_exceptions.DeviceNotFoundError("USB device not found")

        def cut(self):
            raise AssertionError("cut should not be reached")

    monkeypatch.setattr(escpos_printer, "Usb", UnpluggedUsb)
    monkeypatch.setattr(printer_module, "resolve_printer_font_path", lambda: "unused.ttf")
    default_font = ImageFont.load_default()
    monkeypatch.setattr(ImageFont, "truetype", lambda path, size: default_font)

    with pytest.raises(RuntimeError, match="Printer error") as excinfo:
        print_order_bill(make_order("cash"), 1)
    assert isinstance(excinfo.value.__cause__, escpos_exceptions.DeviceNotFoundError)


def test_bill_for_empty_order_is_refused():
    empty = Order(id="o2", table_id="t1", created_at=datetime(2024, 3, 15, tzinfo=timezone.utc))
    with pytest.raises(ValueError):
        print_order_bill(empty, 1)
