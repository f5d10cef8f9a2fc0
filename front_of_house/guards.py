"""Referential checks applied before destructive catalog edits."""

from __future__ import annotations

from front_of_house.catalog import CatalogManager


class CategoryInUseError(ValueError):
    """Raised when a category still has menu items filed under its name."""

    def __init__(self, category_name: str, item_count: int) -> None:
        self.category_name = category_name
        self.item_count = item_count
        super().__init__(
            f'Cannot delete category "{category_name}": {item_count} item(s) still use it.'
        )


def category_conflicts(catalog: CatalogManager, category_id: str) -> int:
    """Count menu items whose category field matches the category's name."""
    category = catalog.get_category(category_id)
    if category is None:
        return 0
    return len(catalog.items_in_category(category.name))


def delete_category_guarded(catalog: CatalogManager, category_id: str) -> bool:
    """Delete a category unless menu items still reference it by name."""
    category = catalog.get_category(category_id)
    if category is None:
        return False
    conflicts = category_conflicts(catalog, category_id)
    if conflicts:
        raise CategoryInUseError(category.name, conflicts)
    return catalog.delete_category(category_id)
