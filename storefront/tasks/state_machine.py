"""
State Machine for the Item Customization Flow.

A ``FlowSession`` walks a customer through the steps of one menu item:

    StepActive(0) -> StepActive(1) -> ... -> Review -> (Add to Order) -> Closed
                                               |  ^
                             jump_to_step(i)   v  |  next / back
                                          EditingStep(i)

Transitions:
- StepActive(i) --next--> commit the working buffer as history[i], then
  StepActive(i+1), or Review when no steps remain.
- StepActive(i) --back--> previous step (history rewound by one), or Closed
  from the first step.
- Review --jump_to_step(i)--> EditingStep(i) with the buffer pre-filled.
- EditingStep(i) --next--> replace history[i] in place, back to Review.
- EditingStep(i) --back--> discard the buffer, back to Review.
- Review --back--> StepActive(last), its entry moved back into the buffer.
- Review --next--> FlowResult for the cart, Closed.

Invariant: outside Review and Closed, ``len(history) == step_index``.

The step list is never stored. It is recomputed from the current item,
mode and visited history on every read, so combo triggers picked mid-flow
re-filter only the steps the customer has not reached yet.
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from ..schemas.catalog import FlowGroup, FlowMode, MenuItem, MenuItemOption, OptionGroup, OptionType
from .customization import CustomizationSession
from .errors import FlowClosedError, UnknownMenuItemError
from .history import SelectionHistory, WorkingSelections
from .models import (
    ADDON_STEP,
    MEAT_STEP,
    REVIEW_STEP,
    VARIATION_STEP,
    Closed,
    EditingStep,
    FlowResult,
    FlowState,
    Review,
    StepActive,
)
from .pricing import PricingEngine, has_combo_trigger
from .steps import compute_steps

if TYPE_CHECKING:
    from ..catalog import Catalog

logger = logging.getLogger(__name__)


class ReviewRow:
    """One editable line of the review screen."""

    def __init__(self, step_index: int, token: str, name: str, text: str, has_selection: bool):
        self.step_index = step_index
        self.token = token
        self.name = name
        self.text = text
        self.has_selection = has_selection


class FlowSession:
    """
    Customization flow for one menu item.

    Args:
        item: Item the flow was opened for.
        catalog: Catalog to resolve option groups and variation siblings.
        flow_group: Category flow group that started the flow, if any.
        mode: Starting mode. Flows always start a la carte except when a
            flow group is explicitly started in combo.
        pricing: Pricing engine; defaults to one using the store currency.
    """

    def __init__(
        self,
        item: MenuItem,
        catalog: "Catalog",
        flow_group: Optional[FlowGroup] = None,
        mode: FlowMode = FlowMode.ALA_CARTE,
        pricing: Optional[PricingEngine] = None,
    ):
        self.catalog = catalog
        self.item = item
        self.flow_group = flow_group
        self.start_mode = mode
        self.pricing = pricing or PricingEngine(catalog.config.currency_symbol)
        self.history = SelectionHistory()
        self.working = WorkingSelections()
        self.customization: Optional[MenuItemOption] = None
        self.base_meat_filter: Optional[str] = None
        if flow_group is not None and item.meat_type and item.meat_type != "All":
            self.base_meat_filter = item.meat_type
        self.meat_filter = self.base_meat_filter
        self._state: FlowState = StepActive(step_index=0)
        self._open_step()
        logger.debug("Flow opened for %s (flow_group=%s)", item.id, flow_group.id if flow_group else None)

    # =========================================================================
    # Derived State
    # =========================================================================

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def is_closed(self) -> bool:
        return isinstance(self._state, Closed)

    @property
    def step_index(self) -> Optional[int]:
        if isinstance(self._state, (StepActive, EditingStep)):
            return self._state.step_index
        return None

    @property
    def editing_index(self) -> Optional[int]:
        if isinstance(self._state, EditingStep):
            return self._state.step_index
        return None

    @property
    def mode(self) -> FlowMode:
        """
        Current flow mode, derived from the committed selections.

        Combo when the flow started in combo, when a Variation step of a
        combo-enabled flow group is committed, or when a counted selection
        is a combo trigger. Editing the trigger away reverts to a la carte.
        """
        if self.start_mode == FlowMode.COMBO:
            return FlowMode.COMBO
        if (
            self.flow_group is not None
            and self.flow_group.enable_combo_option
            and VARIATION_STEP in self.history.tokens()
        ):
            return FlowMode.COMBO
        # The entry under edit is left out; pricing reads its working buffer instead
        if has_combo_trigger(self.history.priceable(self.editing_index)):
            return FlowMode.COMBO
        return FlowMode.ALA_CARTE

    def _filter_mode(self) -> Optional[FlowMode]:
        # Direct flows stay unfiltered until combo mode is known
        mode = self.mode
        if self.flow_group is None and mode != FlowMode.COMBO:
            return None
        return mode

    @property
    def steps(self) -> List[str]:
        return compute_steps(
            self.item,
            self.catalog.option_groups(),
            self._filter_mode(),
            flow_group=self.flow_group,
            visited=self.history.tokens(),
        )

    @property
    def current_step(self) -> Optional[str]:
        if isinstance(self._state, Closed):
            return None
        if isinstance(self._state, Review):
            return REVIEW_STEP
        if isinstance(self._state, EditingStep):
            entry = self.history.entry_for(self._state.step_index)
            if entry is not None:
                return entry.token
        steps = self.steps
        index = self._state.step_index
        # Forced-open flows with no (more) steps fall back to the add-on step
        return steps[index] if index < len(steps) else ADDON_STEP

    def current_group(self) -> Optional[OptionGroup]:
        token = self.current_step
        if token is None:
            return None
        return self.catalog.get_option_group(token)

    def step_options(self) -> List[MenuItemOption]:
        """Options offered on the current step (empty on Variation and Review)."""
        token = self.current_step
        if token == MEAT_STEP:
            return [
                MenuItemOption(name=cat.name, price=0, type=OptionType.PREFERENCE)
                for cat in self.catalog.config.meat_categories
            ]
        if token == ADDON_STEP:
            return list(self.item.options)
        group = self.current_group()
        return list(group.options) if group else []

    def variation_choices(self) -> List[MenuItem]:
        """Items offered on a Variation step: the current item first, then its siblings."""
        return [self.item] + self.catalog.variations_for(self.item, self.meat_filter)

    def max_selection(self, token: Optional[str] = None) -> int:
        """Selection limit of a step (the current one by default); 0 is unlimited."""
        token = token or self.current_step
        if token == MEAT_STEP:
            return 1
        group = self.catalog.get_option_group(token) if token else None
        return group.max_selection if group else 0

    def step_name(self) -> str:
        token = self.current_step
        if token is None:
            return ""
        if token == MEAT_STEP:
            return "Choose Meat"
        if token == VARIATION_STEP:
            if self.meat_filter:
                return f"Select {self.meat_filter} {self.item.category}".strip()
            return f"Select {self.item.category}".strip()
        if token == ADDON_STEP:
            return "Add-ons"
        if token == REVIEW_STEP:
            return "Confirm Order"
        group = self.catalog.get_option_group(token)
        return group.name if group else token

    @property
    def next_label(self) -> str:
        if isinstance(self._state, Review):
            return "Add to Order"
        if isinstance(self._state, EditingStep):
            return "Save Changes"
        return "Continue"

    # =========================================================================
    # Pricing
    # =========================================================================

    def priceable_history(self) -> List[MenuItemOption]:
        """Committed selections counted in the total; the step under edit is left out."""
        selections = self.history.priceable(self.editing_index)
        if self.customization is not None:
            selections.append(self.customization)
        return selections

    def flatten(self) -> List[MenuItemOption]:
        """Everything the cart line will carry, in step order."""
        selections = self.history.flatten()
        if self.customization is not None:
            selections.append(self.customization)
        return selections

    def total(self) -> float:
        return self.pricing.calculate_total(
            self.item, self.mode, self.priceable_history(), self.working.selections,
        )

    # =========================================================================
    # Transitions
    # =========================================================================

    def _ensure_open(self) -> None:
        if self.is_closed:
            raise FlowClosedError(self.item.id)

    def _open_step(self) -> None:
        """Pre-select defaults for the step that just came on screen."""
        self.working.preselect_default(self.current_group())

    def select(self, option_name: str, action: str = "toggle") -> bool:
        """
        Apply a selection action on the current step.

        Args:
            option_name: Name of an option offered on the current step.
            action: "toggle", "increment" or "decrement".

        Returns:
            True if the working buffer changed. Invalid selections are
            ignored and return False.
        """
        self._ensure_open()
        token = self.current_step
        if token in (REVIEW_STEP, VARIATION_STEP):
            logger.debug("Ignoring selection %r on %s step", option_name, token)
            return False

        option = next((opt for opt in self.step_options() if opt.name == option_name), None)
        if option is None:
            logger.debug("Ignoring unknown option %r on step %s", option_name, token)
            return False

        max_selection = self.max_selection(token)
        if action == "increment":
            return self.working.increment(option, max_selection)
        if action == "decrement":
            return self.working.decrement(option)
        return self.working.toggle(option, max_selection)

    def can_advance(self) -> bool:
        """False while a required step has nothing selected."""
        if self.is_closed:
            return False
        if isinstance(self._state, Review):
            return True
        token = self.current_step
        if token == MEAT_STEP and not len(self.working):
            return False
        group = self.current_group()
        if group is not None and group.is_required and not len(self.working):
            return False
        return True

    def next(self, variation_item_id: Optional[str] = None) -> Optional[FlowResult]:
        """
        Continue / Save Changes / Add to Order.

        Args:
            variation_item_id: On a Variation step, the sibling item chosen
                (defaults to keeping the current item).

        Returns:
            A FlowResult when the flow finished from Review, otherwise None.
            Next on a step that cannot advance leaves the flow unchanged.
        """
        self._ensure_open()

        if isinstance(self._state, Review):
            result = FlowResult(item=self.item, selections=self.flatten(), is_combo=self.mode == FlowMode.COMBO)
            logger.debug("Flow for %s finished (combo=%s)", self.item.id, result.is_combo)
            self.close()
            return result

        if not self.can_advance():
            logger.debug("Next ignored on step %s: selection required", self.current_step)
            return None

        index = self._state.step_index
        token = self.current_step

        if isinstance(self._state, EditingStep):
            self.history.commit(index, token, self.working.selections, editing=True)
            if token == MEAT_STEP and len(self.working):
                self.meat_filter = self.working.selections[0].name
            self.working.clear()
            self._state = Review()
            return None

        selections = self.working.selections
        if token == VARIATION_STEP:
            if variation_item_id and variation_item_id != self.item.id:
                chosen = next((i for i in self.variation_choices() if i.id == variation_item_id), None)
                if chosen is None:
                    logger.debug("Ignoring unknown variation %s for %s", variation_item_id, self.item.id)
                    return None
                self.item = chosen
            selections = []
        elif token == MEAT_STEP and selections:
            self.meat_filter = selections[0].name

        self.history.commit(index, token, selections)
        self.working.clear()

        has_more = index < len(self.steps) - 1
        if token == VARIATION_STEP and self.flow_group is not None and self.flow_group.enable_combo_option:
            has_more = True

        if has_more:
            self._state = StepActive(step_index=index + 1)
            self._open_step()
        else:
            self._state = Review()
        logger.debug("Committed step %d (%s) for %s", index, token, self.item.id)
        return None

    def back(self) -> None:
        self._ensure_open()

        if isinstance(self._state, EditingStep):
            self.working.clear()
            self._state = Review()
            return

        if isinstance(self._state, Review):
            entry = self.history.pop()
            if entry is None:
                self._state = StepActive(step_index=0)
                self._open_step()
                return
            if entry.token == MEAT_STEP:
                self.meat_filter = self.base_meat_filter
            self._state = StepActive(step_index=entry.step)
            self.working.replace(entry.selections)
            return

        index = self._state.step_index
        if index <= 0:
            self.close()
            return
        rewound = self.history.entry_for(index - 1)
        if rewound is not None and rewound.token == MEAT_STEP:
            self.meat_filter = self.base_meat_filter
        self.history.rewind(index - 1)
        self.working.clear()
        self._state = StepActive(step_index=index - 1)
        self._open_step()

    def jump_to_step(self, index: int) -> bool:
        """
        Re-open a committed step from Review for editing.

        Returns:
            False (and no state change) outside Review or for a step that
            was never committed.
        """
        self._ensure_open()
        if not isinstance(self._state, Review):
            logger.debug("jump_to_step(%d) ignored outside review", index)
            return False
        entry = self.history.entry_for(index)
        if entry is None:
            logger.debug("jump_to_step(%d) ignored: step not committed", index)
            return False
        self._state = EditingStep(step_index=index)
        self.working.replace(entry.selections)
        self._open_step()
        return True

    def close(self) -> None:
        self._state = Closed()
        self.history = SelectionHistory()
        self.working.clear()
        self.customization = None

    # =========================================================================
    # Customization Sub-Flow
    # =========================================================================

    def open_customization(self, target_item_id: Optional[str] = None) -> CustomizationSession:
        """Start customizing the flow item, or another item offered in the flow."""
        self._ensure_open()
        target = self.item
        if target_item_id and target_item_id != self.item.id:
            target = self.catalog.get_item(target_item_id)
            if target is None:
                raise UnknownMenuItemError(target_item_id)
        return CustomizationSession(target, self.catalog.customization_groups(target))

    def apply_customization(self, option: MenuItemOption) -> None:
        """
        Fold a saved customization into the flow.

        On Review it fills the customization slot (replacing an earlier
        one); on a step it joins the working buffer.
        """
        self._ensure_open()
        if isinstance(self._state, Review):
            self.customization = option
        else:
            self.working.append(option)

    # =========================================================================
    # Review Screen
    # =========================================================================

    def review_rows(self) -> List[ReviewRow]:
        rows = []
        for index, token in enumerate(self.steps):
            if token in (MEAT_STEP, VARIATION_STEP):
                continue
            selections = self.history.selections_for(index)
            if token == ADDON_STEP:
                name, required = "Add-ons", False
            else:
                group = self.catalog.get_option_group(token)
                if group is None or group.is_customization:
                    continue
                name, required = group.name, group.is_required
            if selections:
                text = ", ".join(s.name for s in selections)
            else:
                text = "Required" if required else "No Thanks"
            rows.append(ReviewRow(index, token, name, text, bool(selections)))
        return rows
