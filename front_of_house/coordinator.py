"""Table and order intents issued by the front-of-house screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo

from front_of_house.catalog import CatalogManager
from front_of_house.models import Order
from front_of_house.orders import Clock, OrderLedger, utc_now
from front_of_house.persistence import SnapshotStore
from front_of_house.summary import SummaryAggregator, configured_timezone
from front_of_house.tables import TableRegistry

logger = logging.getLogger(__name__)


@dataclass
class FrontOfHouse:
    """Keeps the table registry and order ledger in step with each other."""

    catalog: CatalogManager
    tables: TableRegistry
    ledger: OrderLedger
    summary: SummaryAggregator

    @classmethod
    def from_store(cls, store: SnapshotStore, clock: Clock = utc_now, tz: tzinfo | None = None) -> FrontOfHouse:
        """Load every collection from store and wire the services together."""
        ledger = OrderLedger(store, clock=clock)
        return cls(
            catalog=CatalogManager(store),
            tables=TableRegistry(store),
            ledger=ledger,
            summary=SummaryAggregator(ledger, tz=tz if tz is not None else configured_timezone(), clock=clock),
        )

    def order_for_table(self, table_id: str) -> Order | None:
        table = self.tables.get(table_id)
        if table is None or table.current_order_id is None:
            return None
        return self.ledger.get(table.current_order_id)

    def open_order(self, table_id: str) -> str | None:
        """Start an order on a free table and mark the table occupied."""
        table = self.tables.get(table_id)
        if table is None or table.status != "available":
            logger.debug("open_order: table %s not available", table_id)
            return None
        order_id = self.ledger.create_order(table_id)
        self.tables.update_table_status(table_id, "occupied", order_id)
        return order_id

    def add_item(self, order_id: str, menu_item_id: str, quantity: int = 1) -> Order | None:
        menu_item = self.catalog.get_menu_item(menu_item_id)
        if menu_item is None:
            logger.debug("add_item: unknown menu item %s", menu_item_id)
            return None
        return self.ledger.add_item_to_order(order_id, menu_item, quantity)

    def park_order(self, order_id: str) -> Order | None:
        """Put an order on standby; its table stays occupied."""
        return self.ledger.update_order_status(order_id, "standby")

    def resume_order(self, order_id: str) -> Order | None:
        order = self.ledger.get(order_id)
        if order is None or order.status != "standby":
            return None
        return self.ledger.update_order_status(order_id, "active")

    def complete_order(self, order_id: str, payment_method: str | None = None) -> bool:
        """Close an order with its payment method and free its table."""
        order = self.ledger.get(order_id)
        if order is None or not order.is_open:
            return False
        if not order.items:
            logger.debug("complete_order: order %s has no items", order_id)
            return False
        self.ledger.update_order_status(order_id, "completed", payment_method)
        self.tables.update_table_status(order.table_id, "available")
        return True
