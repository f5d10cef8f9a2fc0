"""Table registry."""

from __future__ import annotations

import logging
from dataclasses import replace
from uuid import uuid4

from front_of_house.models import Table, check_table_status
from front_of_house.persistence import TABLES_KEY, SnapshotRepository, SnapshotStore

logger = logging.getLogger(__name__)


class TableRegistry:
    """
    Owns the tables and their occupancy status.

    Tables are numbered in creation order and removed last-in first-out.
    """

    def __init__(self, store: SnapshotStore) -> None:
        self._repo = SnapshotRepository(store, TABLES_KEY, Table.from_dict, Table.to_dict)
        self._tables: list[Table] = self._repo.load_all()

    @property
    def tables(self) -> list[Table]:
        return [replace(table) for table in self._tables]

    def get(self, table_id: str) -> Table | None:
        for table in self._tables:
            if table.id == table_id:
                return replace(table)
        return None

    def _set_tables(self, updated: list[Table]) -> None:
        self._tables = updated
        self._repo.save_all(updated)

    def add_table(self) -> Table:
        table = Table(id=uuid4().hex, number=len(self._tables) + 1)
        self._set_tables([*self._tables, table])
        logger.info("table added number=%d id=%s", table.number, table.id)
        return replace(table)

    def remove_table(self) -> Table | None:
        """Remove the most recently added table; nothing happens when there are none."""
        if not self._tables:
            return None
        removed = self._tables[-1]
        self._set_tables(self._tables[:-1])
        logger.info("table removed number=%d id=%s", removed.number, removed.id)
        return removed

    def update_table_status(self, table_id: str, status: str, order_id: str | None = None) -> Table | None:
        """
        Set a table's status and order link.

        The link is replaced on every call, so omitting order_id clears it.
        Unknown ids are ignored.
        """
        check_table_status(status)
        if not any(table.id == table_id for table in self._tables):
            logger.debug("update_table_status: unknown table %s", table_id)
            return None

        updated = [
            replace(table, status=status, current_order_id=order_id) if table.id == table_id else table
            for table in self._tables
        ]
        self._set_tables(updated)
        logger.info("table %s -> %s order=%s", table_id, status, order_id)
        return self.get(table_id)

    def toggle_reserved(self, table_id: str) -> Table | None:
        """Flip a free table to reserved and back; occupied tables are left alone."""
        table = self.get(table_id)
        if table is None or table.status == "occupied":
            return None
        next_status = "available" if table.status == "reserved" else "reserved"
        return self.update_table_status(table_id, next_status)
