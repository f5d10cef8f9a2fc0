"""Order ledger: order lines, totals and status transitions."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable
from uuid import uuid4

from front_of_house.models import (
    MenuItem,
    Order,
    OrderItem,
    check_order_status,
    normalize_payment_method,
)
from front_of_house.persistence import ORDERS_KEY, SnapshotRepository, SnapshotStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderLedger:
    """
    Owns every order ever opened.

    Orders are never deleted; completed ones stay for the daily summaries.
    Each mutation works on a copy of the affected order, swaps it into the
    collection and persists the whole collection.
    """

    def __init__(self, store: SnapshotStore, clock: Clock = utc_now) -> None:
        self._repo = SnapshotRepository(store, ORDERS_KEY, Order.from_dict, Order.to_dict, keep_invalid_entries=True)
        self._orders: list[Order] = self._repo.load_all()
        self._clock = clock

    @property
    def orders(self) -> list[Order]:
        return [order.copy() for order in self._orders]

    def get(self, order_id: str) -> Order | None:
        order = self._find(order_id)
        return order.copy() if order is not None else None

    def open_orders(self) -> list[Order]:
        """Active and standby orders in creation order."""
        return [order.copy() for order in self._orders if order.is_open]

    def completed_orders(self) -> list[Order]:
        return [order.copy() for order in self._orders if order.status == "completed"]

    def _find(self, order_id: str) -> Order | None:
        return next((order for order in self._orders if order.id == order_id), None)

    def _commit(self, updated: Order) -> None:
        self._orders = [updated if order.id == updated.id else order for order in self._orders]
        self._repo.save_all(self._orders)

    def create_order(self, table_id: str) -> str:
        order = Order(id=uuid4().hex, table_id=table_id, created_at=self._clock())
        self._orders = [*self._orders, order]
        self._repo.save_all(self._orders)
        logger.info("order created id=%s table=%s", order.id, table_id)
        return order.id

    def add_item_to_order(self, order_id: str, menu_item: MenuItem, quantity: int = 1) -> Order | None:
        """
        Add quantity of menu_item to the order.

        A line for the same menu item id is incremented instead of duplicated.
        New lines keep a copy of the item, so later catalog price changes do
        not reach this order.
        """
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        current = self._find(order_id)
        if current is None:
            logger.debug("add_item_to_order: unknown order %s", order_id)
            return None

        order = current.copy()
        line = order.find_item(menu_item.id)
        if line is not None:
            line.quantity += quantity
        else:
            order.items.append(OrderItem(menu_item=replace(menu_item), quantity=quantity))
        order.recompute_total()
        self._commit(order)
        logger.info("order %s +%d x %r total=%s", order_id, quantity, menu_item.name, order.total)
        return order.copy()

    def remove_item_from_order(self, order_id: str, menu_item_id: str) -> Order | None:
        """Drop the whole line for menu_item_id, whatever its quantity."""
        current = self._find(order_id)
        if current is None:
            logger.debug("remove_item_from_order: unknown order %s", order_id)
            return None
        if current.find_item(menu_item_id) is None:
            logger.debug("remove_item_from_order: order %s has no item %s", order_id, menu_item_id)
            return None

        order = current.copy()
        order.items = [item for item in order.items if item.menu_item.id != menu_item_id]
        order.recompute_total()
        self._commit(order)
        logger.info("order %s removed item %s total=%s", order_id, menu_item_id, order.total)
        return order.copy()

    def update_order_status(
        self, order_id: str, status: str, payment_method: str | None = None
    ) -> Order | None:
        """
        Move an order to status.

        Completing stamps completed_at and records payment_method when one is
        given. completed_at and payment_method are never cleared. Completed
        is terminal: later calls on a completed order change nothing.
        """
        check_order_status(status)
        method = normalize_payment_method(payment_method)
        current = self._find(order_id)
        if current is None:
            logger.debug("update_order_status: unknown order %s", order_id)
            return None
        if current.status == "completed":
            logger.warning("update_order_status: order %s is completed, ignoring -> %s", order_id, status)
            return None

        order = current.copy()
        order.status = status  # type: ignore[assignment]
        if status == "completed":
            order.completed_at = self._clock()
            if method is not None:
                order.payment_method = method  # type: ignore[assignment]
        self._commit(order)
        logger.info("order %s -> %s payment=%s", order_id, status, order.payment_method)
        return order.copy()
