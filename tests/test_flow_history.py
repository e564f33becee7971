"""
Unit tests for the selection history and the working buffer.
"""

from storefront.schemas.catalog import MenuItemOption, OptionGroup
from storefront.tasks.history import SelectionHistory, WorkingSelections


REGULAR = MenuItemOption(name="Regular")
LARGE = MenuItemOption(name="Large", price=2.0)
CHEESE = MenuItemOption(name="Cheese", price=1.5)
BACON = MenuItemOption(name="Bacon", price=3.0)


# =============================================================================
# SelectionHistory Tests
# =============================================================================

class TestSelectionHistory:
    """Tests for committing, editing and rewinding history."""

    def test_commit_appends(self):
        history = SelectionHistory()
        history.commit(0, "og-size", [REGULAR])
        history.commit(1, "og-extras", [CHEESE])
        assert len(history) == 2
        assert history.tokens() == ["og-size", "og-extras"]
        assert history.flatten() == [REGULAR, CHEESE]

    def test_editing_replaces_in_place(self):
        """Editing a step replaces its entry without moving it."""
        history = SelectionHistory()
        history.commit(0, "og-size", [REGULAR])
        history.commit(1, "og-extras", [CHEESE])
        history.commit(0, "og-size", [LARGE], editing=True)
        assert len(history) == 2
        assert history.flatten() == [LARGE, CHEESE]

    def test_editing_keeps_committed_token(self):
        history = SelectionHistory()
        history.commit(0, "og-size", [REGULAR])
        history.commit(0, "something-else", [LARGE], editing=True)
        assert history.tokens() == ["og-size"]

    def test_editing_missing_entry_is_inserted_in_step_order(self):
        history = SelectionHistory()
        history.commit(0, "og-size", [REGULAR])
        history.commit(2, "og-extras", [CHEESE])
        history.commit(1, "og-drink", [], editing=True)
        assert [e.step for e in history.entries] == [0, 1, 2]

    def test_priceable_excludes_step_under_edit(self):
        history = SelectionHistory()
        history.commit(0, "og-size", [LARGE])
        history.commit(1, "og-extras", [CHEESE])
        assert history.priceable() == [LARGE, CHEESE]
        assert history.priceable(editing_index=0) == [CHEESE]

    def test_rewind_truncates(self):
        history = SelectionHistory()
        for i, token in enumerate(["a", "b", "c"]):
            history.commit(i, token, [])
        history.rewind(1)
        assert history.tokens() == ["a"]

    def test_rewind_to_zero_empties(self):
        history = SelectionHistory()
        history.commit(0, "a", [])
        history.rewind(0)
        assert len(history) == 0

    def test_pop(self):
        history = SelectionHistory()
        assert history.pop() is None
        history.commit(0, "og-size", [REGULAR])
        entry = history.pop()
        assert entry.token == "og-size"
        assert len(history) == 0

    def test_selections_for_uncommitted_step(self):
        assert SelectionHistory().selections_for(3) == []


# =============================================================================
# WorkingSelections Tests
# =============================================================================

class TestWorkingSelections:
    """Tests for selection rules on the step on screen."""

    def test_single_choice_replaces(self):
        working = WorkingSelections()
        working.toggle(REGULAR, max_selection=1)
        working.toggle(LARGE, max_selection=1)
        assert working.selections == [LARGE]

    def test_multi_choice_toggles_off(self):
        working = WorkingSelections()
        working.toggle(CHEESE)
        working.toggle(BACON)
        working.toggle(CHEESE)
        assert working.selections == [BACON]

    def test_max_selection_blocks_additions(self):
        """Adding past the limit is a silent no-op."""
        working = WorkingSelections()
        assert working.toggle(CHEESE, max_selection=2)
        assert working.toggle(BACON, max_selection=2)
        assert not working.toggle(LARGE, max_selection=2)
        assert working.selections == [CHEESE, BACON]

    def test_deselect_allowed_when_full(self):
        working = WorkingSelections([CHEESE, BACON])
        assert working.toggle(CHEESE, max_selection=2)
        assert working.selections == [BACON]

    def test_increment_and_decrement(self):
        working = WorkingSelections()
        working.increment(CHEESE, max_selection=3)
        working.increment(CHEESE, max_selection=3)
        working.increment(BACON, max_selection=3)
        assert not working.increment(BACON, max_selection=3)
        assert working.count("Cheese") == 2
        working.decrement(CHEESE)
        assert working.selections == [CHEESE, BACON]

    def test_decrement_missing_option(self):
        assert not WorkingSelections().decrement(CHEESE)

    def test_preselect_required_single_choice(self):
        group = OptionGroup(id="og-size", name="Size", is_required=True, max_selection=1, options=[REGULAR, LARGE])
        working = WorkingSelections()
        assert working.preselect_default(group)
        assert working.selections == [REGULAR]

    def test_preselect_keeps_existing_selection(self):
        group = OptionGroup(id="og-size", name="Size", is_required=True, max_selection=1, options=[REGULAR, LARGE])
        working = WorkingSelections([LARGE])
        assert not working.preselect_default(group)
        assert working.selections == [LARGE]

    def test_no_preselect_for_optional_or_multi_groups(self):
        optional = OptionGroup(id="a", name="A", max_selection=1, options=[REGULAR])
        multi = OptionGroup(id="b", name="B", is_required=True, options=[CHEESE])
        working = WorkingSelections()
        assert not working.preselect_default(optional)
        assert not working.preselect_default(multi)
        assert not working.preselect_default(None)
        assert len(working) == 0
