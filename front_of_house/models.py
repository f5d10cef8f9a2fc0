"""Domain models for front-of-house."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Literal

from front_of_house.constant import LEGACY_PAYMENT_METHODS

TableStatus = Literal["available", "occupied", "reserved"]
OrderStatus = Literal["active", "standby", "completed"]
PaymentMethod = Literal["cash", "card", "pix"]

TABLE_STATUSES: tuple[str, ...] = ("available", "occupied", "reserved")
ORDER_STATUSES: tuple[str, ...] = ("active", "standby", "completed")
PAYMENT_METHODS: tuple[str, ...] = ("cash", "card", "pix")

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Parse a price coming from JSON (string or number) into a Decimal."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc
    if not parsed.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return parsed


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def check_table_status(status: str) -> None:
    if status not in TABLE_STATUSES:
        raise ValueError(f"Unknown table status: {status!r}")


def check_order_status(status: str) -> None:
    if status not in ORDER_STATUSES:
        raise ValueError(f"Unknown order status: {status!r}")


def normalize_payment_method(value: str | None) -> str | None:
    """Map stored payment method values, including legacy names, to canonical ones."""
    if value is None or value == "":
        return None
    method = LEGACY_PAYMENT_METHODS.get(value, value)
    if method not in PAYMENT_METHODS:
        raise ValueError(f"Unknown payment method: {value!r}")
    return method


@dataclass(frozen=True)
class Category:
    """A menu section. Menu items point at it by name."""

    id: str
    name: str
    icon: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "icon": self.icon}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Category:
        return cls(id=str(raw["id"]), name=str(raw["name"]), icon=str(raw.get("icon", "Utensils")))


@dataclass(frozen=True)
class MenuItem:
    """A sellable item with its current catalog price."""

    id: str
    name: str
    category: str
    price: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "category": self.category, "price": str(self.price)}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> MenuItem:
        return cls(
            id=str(raw["id"]),
            name=str(raw["name"]),
            category=str(raw["category"]),
            price=to_decimal(raw["price"]),
        )


@dataclass
class Table:
    """A physical table and the order currently running on it."""

    id: str
    number: int
    status: TableStatus = "available"
    current_order_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "number": self.number, "status": self.status}
        if self.current_order_id is not None:
            data["currentOrderId"] = self.current_order_id
        return data

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Table:
        status = str(raw.get("status", "available"))
        check_table_status(status)
        return cls(
            id=str(raw["id"]),
            number=int(raw["number"]),
            status=status,  # type: ignore[arg-type]
            current_order_id=raw.get("currentOrderId") or None,
        )


@dataclass
class OrderItem:
    """One order line; the menu item is a copy taken when the line was added."""

    menu_item: MenuItem
    quantity: int = 1

    @property
    def line_total(self) -> Decimal:
        return self.menu_item.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {"menuItem": self.menu_item.to_dict(), "quantity": self.quantity}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> OrderItem:
        quantity = int(raw["quantity"])
        if quantity < 1:
            raise ValueError(f"Invalid quantity: {quantity}")
        return cls(menu_item=MenuItem.from_dict(raw["menuItem"]), quantity=quantity)


@dataclass
class Order:
    """The running tab of one table visit."""

    id: str
    table_id: str
    created_at: datetime
    items: list[OrderItem] = field(default_factory=list)
    status: OrderStatus = "active"
    total: Decimal = ZERO
    payment_method: PaymentMethod | None = None
    completed_at: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.status != "completed"

    def find_item(self, menu_item_id: str) -> OrderItem | None:
        for item in self.items:
            if item.menu_item.id == menu_item_id:
                return item
        return None

    def recompute_total(self) -> None:
        self.total = sum((item.line_total for item in self.items), ZERO)

    def copy(self) -> Order:
        """Return a copy whose item list can be mutated independently."""
        return replace(self, items=[replace(item) for item in self.items])

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "tableId": self.table_id,
            "items": [item.to_dict() for item in self.items],
            "status": self.status,
            "total": str(self.total),
            "createdAt": self.created_at.isoformat(),
        }
        if self.payment_method is not None:
            data["paymentMethod"] = self.payment_method
        if self.completed_at is not None:
            data["completedAt"] = self.completed_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Order:
        status = str(raw.get("status", "active"))
        check_order_status(status)
        completed_at = raw.get("completedAt")
        order = cls(
            id=str(raw["id"]),
            table_id=str(raw["tableId"]),
            created_at=parse_timestamp(str(raw["createdAt"])),
            items=[OrderItem.from_dict(item) for item in raw.get("items", [])],
            status=status,  # type: ignore[arg-type]
            payment_method=normalize_payment_method(raw.get("paymentMethod")),  # type: ignore[arg-type]
            completed_at=parse_timestamp(str(completed_at)) if completed_at else None,
        )
        # The stored total is a cache; the lines are authoritative.
        order.recompute_total()
        return order


@dataclass(frozen=True)
class DailySummary:
    """Revenue figures for one calendar day."""

    date: date
    total_revenue: Decimal
    completed_orders: int
    payment_methods: dict[str, Decimal]
