"""
Selection History Store and Working Buffer.

``SelectionHistory`` records the committed selections, one entry per step
index. Entries are appended while advancing, replaced in place when a step
is edited from the review screen, and truncated on Back.

``WorkingSelections`` holds the uncommitted selections of the step on
screen and enforces the selection rules of its option group. Rule
violations (too many selections, unknown options) are silent no-ops: the
UI shows those affordances as disabled.
"""

import logging
from typing import Iterable, List, Optional

from ..schemas.catalog import MenuItemOption, OptionGroup
from .models import HistoryEntry

logger = logging.getLogger(__name__)


class SelectionHistory:
    """Ordered record of committed step selections."""

    def __init__(self):
        self._entries: List[HistoryEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def commit(
        self,
        step_index: int,
        token: str,
        selections: Iterable[MenuItemOption],
        editing: bool = False,
    ) -> HistoryEntry:
        """
        Record the selections of a step.

        While editing, the entry for ``step_index`` is replaced in place (or
        inserted and re-sorted by step if it is missing). Otherwise the entry
        is appended.
        """
        entry = HistoryEntry(step=step_index, token=token, selections=list(selections))
        if not editing:
            self._entries.append(entry)
            return entry

        for idx, existing in enumerate(self._entries):
            if existing.step == step_index:
                entry.token = existing.token
                self._entries[idx] = entry
                return entry

        self._entries.append(entry)
        self._entries.sort(key=lambda e: e.step)
        return entry

    def entry_for(self, step_index: int) -> Optional[HistoryEntry]:
        for entry in self._entries:
            if entry.step == step_index:
                return entry
        return None

    def selections_for(self, step_index: int) -> List[MenuItemOption]:
        entry = self.entry_for(step_index)
        return list(entry.selections) if entry else []

    def priceable_entries(self, editing_index: Optional[int] = None) -> List[HistoryEntry]:
        """Entries that count toward the price. The step under edit is excluded."""
        if editing_index is None:
            return list(self._entries)
        return [e for e in self._entries if e.step != editing_index]

    def priceable(self, editing_index: Optional[int] = None) -> List[MenuItemOption]:
        """
        Committed selections that count toward the running total.

        The entry of the step under edit is left out because its live
        version is the working buffer; counting both would double-charge it.
        """
        return [opt for e in self.priceable_entries(editing_index) for opt in e.selections]

    def flatten(self) -> List[MenuItemOption]:
        """All committed selections across all steps, in step order."""
        return [opt for e in self._entries for opt in e.selections]

    def tokens(self) -> List[str]:
        return [e.token for e in self._entries]

    def rewind(self, to_index: int) -> None:
        """Truncate the history to its first ``to_index`` entries."""
        del self._entries[max(0, to_index):]

    def pop(self) -> Optional[HistoryEntry]:
        return self._entries.pop() if self._entries else None


class WorkingSelections:
    """Uncommitted selections for the step currently on screen."""

    def __init__(self, selections: Iterable[MenuItemOption] = ()):
        self._selections: List[MenuItemOption] = list(selections)

    def __len__(self) -> int:
        return len(self._selections)

    def __iter__(self):
        return iter(self._selections)

    @property
    def selections(self) -> List[MenuItemOption]:
        return list(self._selections)

    def replace(self, selections: Iterable[MenuItemOption]) -> None:
        self._selections = list(selections)

    def clear(self) -> None:
        self._selections = []

    def append(self, option: MenuItemOption) -> None:
        self._selections.append(option)

    def count(self, name: str) -> int:
        return sum(1 for s in self._selections if s.name == name)

    def is_full(self, max_selection: int) -> bool:
        return max_selection > 0 and len(self._selections) >= max_selection

    def toggle(self, option: MenuItemOption, max_selection: int = 0) -> bool:
        """
        Binary selection of an option.

        Single-choice groups (max 1) replace the selection; otherwise the
        option is toggled by name. Adding past ``max_selection`` is ignored.

        Returns:
            True if the buffer changed.
        """
        if max_selection == 1:
            self._selections = [option]
            return True

        if self.count(option.name):
            self._selections = [s for s in self._selections if s.name != option.name]
            return True

        if self.is_full(max_selection):
            logger.debug("Ignoring %s: max selection %d reached", option.name, max_selection)
            return False

        self._selections.append(option)
        return True

    def increment(self, option: MenuItemOption, max_selection: int = 0) -> bool:
        """Add another instance of an option (quantity groups)."""
        if self.is_full(max_selection):
            logger.debug("Ignoring increment of %s: max selection %d reached", option.name, max_selection)
            return False
        self._selections.append(option)
        return True

    def decrement(self, option: MenuItemOption) -> bool:
        """Remove one instance of an option (quantity groups)."""
        for idx, selected in enumerate(self._selections):
            if selected.name == option.name:
                del self._selections[idx]
                return True
        return False

    def preselect_default(self, group: Optional[OptionGroup]) -> bool:
        """Pre-select the first option of a required single-choice group when nothing is selected."""
        if group is None or self._selections or not group.options:
            return False
        if group.is_required and group.is_single_choice:
            self._selections = [group.options[0]]
            return True
        return False
