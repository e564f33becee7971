"""
Customization Sub-Flow.

Ingredient customization ("no onions", "extra cheese") lives in option
groups flagged ``is_customization``. Those groups never appear as steps of
the main flow; they are edited in a separate sub-flow opened with the
Customize action and folded back into the main flow as ONE synthesized
add-on option:

    name  = "<item name> (a, b)"   (just the item name when nothing is picked)
    price = item price + modifier deltas
"""

import logging
from typing import Dict, List, Optional

from ..schemas.catalog import MenuItem, MenuItemOption, OptionGroup, OptionType
from .history import WorkingSelections
from .pricing import sum_options

logger = logging.getLogger(__name__)


def synthesize_customization_option(item: MenuItem, modifiers: List[MenuItemOption]) -> MenuItemOption:
    """Fold customization modifiers into a single add-on option."""
    if modifiers:
        name = f"{item.name} ({', '.join(m.name for m in modifiers)})"
    else:
        name = item.name
    return MenuItemOption(
        name=name,
        price=round(item.price + sum_options(modifiers), 2),
        type=OptionType.ADDON,
        image_url=item.image_url or None,
    )


class CustomizationSession:
    """
    Selections for the customization groups of one item.

    Args:
        item: The item being customized.
        groups: Its ``is_customization`` option groups, in link order.
    """

    def __init__(self, item: MenuItem, groups: List[OptionGroup]):
        self.item = item
        self.groups = list(groups)
        self._buffers: Dict[str, WorkingSelections] = {g.id: WorkingSelections() for g in self.groups}

    def _group(self, group_id: str) -> Optional[OptionGroup]:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def select(self, group_id: str, option_name: str, action: str = "toggle") -> bool:
        """
        Apply a selection action to one customization group.

        Unknown groups, unknown options and over-limit additions are ignored.

        Returns:
            True if the selections changed.
        """
        group = self._group(group_id)
        option = group.find_option(option_name) if group else None
        if group is None or option is None:
            logger.debug("Ignoring customization %s/%s on %s", group_id, option_name, self.item.id)
            return False

        buffer = self._buffers[group.id]
        if action == "increment":
            return buffer.increment(option, group.max_selection)
        if action == "decrement":
            return buffer.decrement(option)
        return buffer.toggle(option, group.max_selection)

    def selections(self) -> List[MenuItemOption]:
        """All picked modifiers, grouped in link order."""
        return [opt for group in self.groups for opt in self._buffers[group.id]]

    def selections_for(self, group_id: str) -> List[MenuItemOption]:
        buffer = self._buffers.get(group_id)
        return buffer.selections if buffer else []

    def save(self) -> MenuItemOption:
        option = synthesize_customization_option(self.item, self.selections())
        logger.debug("Customization of %s saved as %r", self.item.id, option.name)
        return option
