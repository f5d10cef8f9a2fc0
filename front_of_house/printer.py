"""Thermal printer output for table bills."""

from __future__ import annotations

import os
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from time import sleep

from front_of_house.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from front_of_house.data import payment_method_label
from front_of_house.models import Order

# Separator tuning values.
_SECTION_SEPARATOR_HEIGHT_PX = 12
_SECTION_SEPARATOR_THICKNESS_PX = 3
_SECTION_SEPARATOR_STRIPE_HEIGHT_PX = 2
_SECTION_SEPARATOR_PAUSE_SECONDS = 0.1
_LINE_EXTRA_PX = 12
_AMOUNT_RIGHT_GUTTER_PX = 8
_FONT_OVERRIDE_ENV = "FOH_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)
SEPARATOR = "__SEP__"


def _amount(value: Decimal) -> str:
    return str(value.quantize(Decimal("0.01")))


def bill_lines(order: Order, table_number: int | None, printed_at: datetime | None = None) -> list[tuple[str, str]]:
    """
    Lay out a bill as (left text, right-aligned amount) rows.

    SEPARATOR rows mark where a horizontal rule is printed.
    """
    rows: list[tuple[str, str]] = []
    title = f"Table {table_number}" if table_number is not None else "Bill"
    rows.append((title, ""))
    stamp = printed_at or order.completed_at or order.created_at
    rows.append((stamp.astimezone().strftime("%d/%m/%Y %H:%M"), ""))
    rows.append((SEPARATOR, ""))
    for item in order.items:
        rows.append((f"{item.quantity}x {item.menu_item.name}", _amount(item.line_total)))
    rows.append((SEPARATOR, ""))
    rows.append(("TOTAL", _amount(order.total)))
    if order.payment_method is not None:
        rows.append((f"Paid: {payment_method_label(order.payment_method)}", ""))
    return rows


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. FOH_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont
        font_path = resolve_printer_font_path()
        ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer unavailable: {exc}")
    return (True, "Printer ready")


def _fit_text_to_px(text: str, font: object, max_width_px: int) -> str:
    from PIL import Image, ImageDraw

    scratch = Image.new("1", (1, 1), color=1)
    draw = ImageDraw.Draw(scratch)
    if draw.textbbox((0, 0), text, font=font)[2] <= max_width_px:
        return text
    ellipsis = "..."
    trimmed = text
    while trimmed:
        candidate = f"{trimmed}{ellipsis}"
        if draw.textbbox((0, 0), candidate, font=font)[2] <= max_width_px:
            return candidate
        trimmed = trimmed[:-1]
    return ellipsis


def _render_row(left: str, right: str, font: object) -> object:
    from PIL import Image, ImageDraw

    canvas_height = PRINTER_FONT_SIZE + _LINE_EXTRA_PX
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)

    right_width = 0
    right_bbox = (0, 0, 0, 0)
    if right:
        right_bbox = draw.textbbox((0, 0), right, font=font)
        right_width = right_bbox[2] - right_bbox[0]

    left_room = PRINTER_WIDTH_PX - PRINTER_LEFT_INDENT_PX - _AMOUNT_RIGHT_GUTTER_PX - right_width - 12
    left = _fit_text_to_px(left, font, max(40, left_room))
    left_bbox = draw.textbbox((0, 0), left, font=font)
    text_height = left_bbox[3] - left_bbox[1]
    # Offset by bbox top so descenders are not clipped.
    y = (canvas_height - text_height) // 2 - left_bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), left, font=font, fill=0)
    if right:
        x = PRINTER_WIDTH_PX - _AMOUNT_RIGHT_GUTTER_PX - right_width - right_bbox[0]
        draw.text((x, y), right, font=font, fill=0)
    return img


def _render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def _render_section_separator() -> object:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, _SECTION_SEPARATOR_HEIGHT_PX), color=1)
    draw = ImageDraw.Draw(img)
    top = max(0, (_SECTION_SEPARATOR_HEIGHT_PX - _SECTION_SEPARATOR_THICKNESS_PX) // 2)
    bottom = min(_SECTION_SEPARATOR_HEIGHT_PX - 1, top + _SECTION_SEPARATOR_THICKNESS_PX - 1)
    draw.rectangle((0, top, PRINTER_WIDTH_PX - 1, bottom), fill=0)
    return img


def _print_section_separator(printer: object) -> None:
    """Print the separator in short stripes with tiny pauses so it does not bleed."""
    separator = _render_section_separator()
    for top in range(0, separator.height, _SECTION_SEPARATOR_STRIPE_HEIGHT_PX):
        bottom = min(separator.height, top + _SECTION_SEPARATOR_STRIPE_HEIGHT_PX)
        stripe = separator.crop((0, top, PRINTER_WIDTH_PX, bottom))
        printer.image(stripe)
        if bottom < separator.height:
            sleep(_SECTION_SEPARATOR_PAUSE_SECONDS)


def print_order_bill(order: Order, table_number: int | None) -> None:
    """
    Print the bill for an order and cut the ticket at the end.

    Device errors from python-escpos (printer unplugged, no USB backend,
    write failures) surface as RuntimeError.
    """
    if not order.items:
        raise ValueError("Cannot print a bill without items")

    try:
        from escpos.exceptions import Error as EscposError
        from escpos.printer import Usb
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)

    try:
        printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
        for left, right in bill_lines(order, table_number):
            if left == SEPARATOR:
                _print_section_separator(printer)
                continue
            printer.image(_render_row(left, right, font))

        printer.image(_render_spacer(PRINTER_TAIL_SPACER_PX))
        printer.cut()
    except (EscposError, OSError, ValueError) as exc:
        raise RuntimeError(f"Printer error: {exc}") from exc
