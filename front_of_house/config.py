"""Runtime configuration defaults for persistence, logging and printing."""

from __future__ import annotations

import os

DB_PATH = os.environ.get("FOH_DB_PATH", "data/front-of-house.db")

# IANA zone name used to decide which calendar day an order was completed on.
# Empty means the system local timezone.
LOCAL_TIMEZONE = os.environ.get("FOH_TIMEZONE", "")

DEBUG_LOG_PATH = "/tmp/front-of-house-debug.log"

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 28
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 16
PRINTER_TAIL_SPACER_PX = 70
