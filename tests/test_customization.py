"""
Tests for the ingredient customization sub-flow.
"""

from storefront.schemas.catalog import MenuItem, MenuItemOption, OptionGroup, OptionType
from storefront.tasks.customization import CustomizationSession, synthesize_customization_option


BURGER = MenuItem(id="b", name="Classic Burger", price=15.0, image_url="http://img/b.png")
NO_ONION = MenuItemOption(name="No Onion", type=OptionType.PREFERENCE)
PICKLES = MenuItemOption(name="Extra Pickles", price=0.5)
SAUCE = MenuItemOption(name="Extra Sauce", price=1.0)


def make_session():
    groups = [
        OptionGroup(id="og-ingredients", name="Ingredients", is_customization=True, options=[NO_ONION, PICKLES]),
        OptionGroup(
            id="og-sauce", name="Sauce", is_customization=True, allow_quantity=True,
            max_selection=2, options=[SAUCE],
        ),
    ]
    return CustomizationSession(BURGER, groups)


class TestSynthesizeOption:
    """Tests for folding modifiers into one add-on option."""

    def test_name_lists_modifiers(self):
        option = synthesize_customization_option(BURGER, [NO_ONION, PICKLES])
        assert option.name == "Classic Burger (No Onion, Extra Pickles)"
        assert option.type == OptionType.ADDON
        assert option.image_url == "http://img/b.png"

    def test_price_includes_item_price(self):
        assert synthesize_customization_option(BURGER, [PICKLES]).price == 15.5

    def test_price_adds_every_modifier(self):
        assert synthesize_customization_option(BURGER, [NO_ONION, PICKLES, SAUCE]).price == 16.5

    def test_no_modifiers(self):
        option = synthesize_customization_option(BURGER, [])
        assert option.name == "Classic Burger"
        assert option.price == 15.0


class TestCustomizationSession:

    def test_toggle(self):
        session = make_session()
        session.select("og-ingredients", "No Onion")
        session.select("og-ingredients", "Extra Pickles")
        session.select("og-ingredients", "No Onion")
        assert session.selections() == [PICKLES]

    def test_quantity_group(self):
        session = make_session()
        session.select("og-sauce", "Extra Sauce", "increment")
        session.select("og-sauce", "Extra Sauce", "increment")
        assert session.select("og-sauce", "Extra Sauce", "increment") is False
        assert session.selections_for("og-sauce") == [SAUCE, SAUCE]

    def test_unknown_group_or_option_is_ignored(self):
        session = make_session()
        assert session.select("og-nope", "No Onion") is False
        assert session.select("og-ingredients", "Mayo") is False
        assert session.selections() == []

    def test_selections_in_group_order(self):
        session = make_session()
        session.select("og-sauce", "Extra Sauce", "increment")
        session.select("og-ingredients", "Extra Pickles")
        assert session.selections() == [PICKLES, SAUCE]

    def test_save(self):
        session = make_session()
        session.select("og-ingredients", "No Onion")
        session.select("og-sauce", "Extra Sauce", "increment")
        option = session.save()
        assert option.name == "Classic Burger (No Onion, Extra Sauce)"
        assert option.price == 16.0
