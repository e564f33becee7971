"""
Catalog Store - In-Memory Menu, Option Groups and Outlets.

This module holds the storefront catalog that the customization flow reads
from and the back office writes to. The catalog lives in memory; it can be
seeded from the demo menu, loaded from a JSON backup at startup, and
exported again from the admin endpoints.

Features:
- Read accessors used by the flow engine (items, option groups, flow groups,
  variation siblings)
- Admin mutations (upsert, delete, duplicate, reorder) under a lock
- JSON backup export/import in the frontend's camelCase format

Usage:
    from storefront.catalog import catalog

    item = catalog.get_item("classic-burger")
    groups = catalog.option_groups()
"""

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from .schemas.catalog import (
    CatalogBackup,
    FlowGroup,
    MenuItem,
    OptionGroup,
    Outlet,
    StoreConfig,
)

logger = logging.getLogger(__name__)


class Catalog:
    """
    In-memory catalog shared by the storefront and the back office.

    The flow engine only reads from it. Writers (admin routes, backup import)
    go through the methods below, which hold ``_lock`` while replacing lists
    so readers always see a complete list.
    """

    def __init__(self, backup: CatalogBackup | None = None):
        self._lock = threading.RLock()
        self._items: List[MenuItem] = []
        self._config = StoreConfig()
        self._outlets: List[Outlet] = []
        if backup is not None:
            self.load(backup)

    # =========================================================================
    # Loading
    # =========================================================================

    def load(self, backup: CatalogBackup) -> None:
        """Replace the whole catalog with the contents of a backup."""
        with self._lock:
            self._items = [item.model_copy(deep=True) for item in backup.menu_items]
            self._config = backup.config.model_copy(deep=True)
            self._outlets = [outlet.model_copy(deep=True) for outlet in backup.outlets]
        logger.info(
            "Catalog loaded: %d items, %d option groups, %d outlets",
            len(self._items), len(self._config.option_groups), len(self._outlets),
        )

    def load_from_file(self, path: str | Path) -> None:
        """Load a JSON backup file exported from the admin panel."""
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        self.import_backup(data)

    def import_backup(self, data: Dict[str, Any]) -> CatalogBackup:
        """
        Validate and load a backup document.

        Raises:
            pydantic.ValidationError: If the document is not a valid backup.
                The current catalog is left untouched in that case.
        """
        backup = CatalogBackup.model_validate(data)
        self.load(backup)
        return backup

    def export_backup(self) -> CatalogBackup:
        """Snapshot the catalog as a backup document."""
        with self._lock:
            return CatalogBackup(
                menu_items=[item.model_copy(deep=True) for item in self._items],
                config=self._config.model_copy(deep=True),
                outlets=[outlet.model_copy(deep=True) for outlet in self._outlets],
            )

    # =========================================================================
    # Read Accessors (used by the flow engine)
    # =========================================================================

    @property
    def config(self) -> StoreConfig:
        return self._config

    def items(self) -> List[MenuItem]:
        return list(self._items)

    def get_item(self, item_id: str) -> Optional[MenuItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def visible_items(self, outlet_id: Optional[str] = None) -> List[MenuItem]:
        """Items shown on the storefront, filtered by outlet availability."""
        return [
            item for item in self._items
            if not item.is_hidden and item.is_available_at(outlet_id)
        ]

    def option_groups(self) -> Dict[str, OptionGroup]:
        """Option groups keyed by id."""
        return {group.id: group for group in self._config.option_groups}

    def get_option_group(self, group_id: str) -> Optional[OptionGroup]:
        return self.option_groups().get(group_id)

    def linked_groups(self, item: MenuItem) -> List[OptionGroup]:
        """Resolved option groups linked to an item, in link order. Missing ids are skipped."""
        groups = self.option_groups()
        return [groups[gid] for gid in item.linked_option_group_ids if gid in groups]

    def customization_groups(self, item: MenuItem) -> List[OptionGroup]:
        return [group for group in self.linked_groups(item) if group.is_customization]

    def find_flow_group(self, category: str) -> Optional[FlowGroup]:
        """Flow group triggered by a category, if any."""
        for group in self._config.flow_groups:
            if category in group.triggers:
                return group
        return None

    def variations_for(self, item: MenuItem, meat_filter: Optional[str] = None) -> List[MenuItem]:
        """Sibling items listed on a Variation step: same category, same meat when filtered."""
        return [
            other for other in self._items
            if other.category == item.category
            and (meat_filter is None or other.meat_type == meat_filter)
            and other.id != item.id
        ]

    def outlets(self) -> List[Outlet]:
        return list(self._outlets)

    def get_outlet(self, outlet_id: str) -> Optional[Outlet]:
        for outlet in self._outlets:
            if outlet.id == outlet_id:
                return outlet
        return None

    # =========================================================================
    # Admin Mutations
    # =========================================================================

    def upsert_item(self, item: MenuItem) -> MenuItem:
        """Replace an item with the same id, or insert a new one at the top."""
        with self._lock:
            items = list(self._items)
            for idx, existing in enumerate(items):
                if existing.id == item.id:
                    items[idx] = item
                    break
            else:
                items.insert(0, item)
            self._items = items
        logger.info("Saved menu item: %s (id=%s)", item.name, item.id)
        return item

    def delete_item(self, item_id: str) -> bool:
        with self._lock:
            remaining = [item for item in self._items if item.id != item_id]
            deleted = len(remaining) != len(self._items)
            self._items = remaining
        if deleted:
            logger.info("Deleted menu item id=%s", item_id)
        return deleted

    def duplicate_item(self, item_id: str) -> Optional[MenuItem]:
        """Copy an item and insert the copy right after the original."""
        with self._lock:
            for idx, item in enumerate(self._items):
                if item.id == item_id:
                    copy = item.model_copy(
                        deep=True,
                        update={"id": f"item-{uuid.uuid4().hex[:8]}", "name": f"{item.name} (Copy)"},
                    )
                    items = list(self._items)
                    items.insert(idx + 1, copy)
                    self._items = items
                    logger.info("Duplicated menu item %s -> %s", item_id, copy.id)
                    return copy
        return None

    def move_item(self, item_id: str, direction: str) -> bool:
        """
        Swap an item with its neighbour inside the same category.

        Args:
            direction: "up" or "down"

        Returns:
            False when the item is unknown or already at the edge.
        """
        with self._lock:
            items = list(self._items)
            idx = next((i for i, item in enumerate(items) if item.id == item_id), None)
            if idx is None:
                return False
            category = items[idx].category
            same_category = [i for i, item in enumerate(items) if item.category == category]
            pos = same_category.index(idx)
            target_pos = pos - 1 if direction == "up" else pos + 1
            if target_pos < 0 or target_pos >= len(same_category):
                return False
            target = same_category[target_pos]
            items[idx], items[target] = items[target], items[idx]
            self._items = items
        return True

    def upsert_option_group(self, group: OptionGroup) -> OptionGroup:
        with self._lock:
            groups = list(self._config.option_groups)
            for idx, existing in enumerate(groups):
                if existing.id == group.id:
                    groups[idx] = group
                    break
            else:
                groups.append(group)
            self._config = self._config.model_copy(update={"option_groups": groups})
        logger.info("Saved option group: %s (id=%s)", group.name, group.id)
        return group

    def delete_option_group(self, group_id: str) -> bool:
        """Delete a group and unlink it from every item that referenced it."""
        with self._lock:
            groups = [g for g in self._config.option_groups if g.id != group_id]
            if len(groups) == len(self._config.option_groups):
                return False
            self._config = self._config.model_copy(update={"option_groups": groups})
            self._items = [
                item.model_copy(update={
                    "linked_option_group_ids": [gid for gid in item.linked_option_group_ids if gid != group_id],
                })
                if group_id in item.linked_option_group_ids else item
                for item in self._items
            ]
        logger.info("Deleted option group id=%s", group_id)
        return True

    def duplicate_option_group(self, group_id: str) -> Optional[OptionGroup]:
        group = self.get_option_group(group_id)
        if group is None:
            return None
        copy = group.model_copy(
            deep=True,
            update={"id": f"og-{uuid.uuid4().hex[:8]}", "name": f"{group.name} (Copy)"},
        )
        return self.upsert_option_group(copy)

    def update_config(self, config: StoreConfig) -> StoreConfig:
        with self._lock:
            self._config = config.model_copy(deep=True)
        logger.info("Store configuration updated")
        return self._config

    def get_status(self) -> Dict[str, Any]:
        """Summary counts for the admin dashboard."""
        return {
            "items": len(self._items),
            "option_groups": len(self._config.option_groups),
            "flow_groups": len(self._config.flow_groups),
            "outlets": len(self._outlets),
        }


catalog = Catalog()


def get_catalog() -> Catalog:
    """FastAPI dependency returning the shared catalog."""
    return catalog
