"""
Demo catalog used when no CATALOG_PATH backup is configured.

A small burger shop: direct-flow burgers with combo upgrades, a signature
category driven by a flow group, a side with inline options and a drink
that goes straight into the cart.
"""

from .config import CURRENCY_SYMBOL, DEFAULT_WHATSAPP_TEMPLATE
from .schemas.catalog import (
    CatalogBackup,
    Category,
    DisplayMode,
    FlowGroup,
    MenuItem,
    MenuItemOption,
    OptionGroup,
    OptionType,
    Outlet,
    StoreConfig,
)


IMG_BASE = "https://placehold.co/600x450/FFCB05/1A1A1A"


def build_option_groups() -> list[OptionGroup]:
    return [
        OptionGroup(
            id="og-size",
            name="Size",
            is_required=True,
            max_selection=1,
            options=[
                MenuItemOption(name="Regular", price=0),
                MenuItemOption(name="Large", price=2.00),
            ],
        ),
        OptionGroup(
            id="og-make-combo",
            name="Make it a Combo?",
            max_selection=1,
            options=[
                MenuItemOption(name="Ala Carte", price=0),
                MenuItemOption(name="Combo", price=0, is_combo_trigger=True),
            ],
        ),
        OptionGroup(
            id="og-side",
            name="Side",
            is_required=True,
            max_selection=1,
            display_mode=DisplayMode.COMBO,
            options=[
                MenuItemOption(name="Fries", price=0),
                MenuItemOption(name="Potato Wedges", price=1.50),
            ],
        ),
        OptionGroup(
            id="og-drink",
            name="Drink",
            is_required=True,
            max_selection=1,
            display_mode=DisplayMode.COMBO,
            options=[
                MenuItemOption(name="Cola", price=0),
                MenuItemOption(name="Iced Lemon Tea", price=1.00),
            ],
        ),
        OptionGroup(
            id="og-extras",
            name="Extras",
            max_selection=4,
            allow_quantity=True,
            options=[
                MenuItemOption(name="Cheese", price=1.50),
                MenuItemOption(name="Bacon", price=3.00),
            ],
        ),
        OptionGroup(
            id="og-ingredients",
            name="Ingredients",
            is_customization=True,
            options=[
                MenuItemOption(name="No Lettuce", type=OptionType.PREFERENCE),
                MenuItemOption(name="No Onion", type=OptionType.PREFERENCE),
                MenuItemOption(name="Extra Pickles", price=0.50),
            ],
        ),
    ]


def build_menu_items() -> list[MenuItem]:
    burger_groups = ["og-size", "og-make-combo", "og-side", "og-drink", "og-extras", "og-ingredients"]
    signature_groups = ["og-side", "og-drink", "og-ingredients"]
    return [
        MenuItem(
            id="classic-burger",
            name="Classic Burger",
            price=15.00,
            combo_price=20.00,
            category="Burgers",
            meat_type="Beef",
            description="Grilled beef patty, lettuce, tomato and house sauce.",
            image_url=f"{IMG_BASE}?text=Classic",
            linked_option_group_ids=burger_groups,
        ),
        MenuItem(
            id="chicken-burger",
            name="Crispy Chicken Burger",
            price=13.00,
            combo_price=18.00,
            category="Burgers",
            meat_type="Chicken",
            description="Buttermilk fried chicken thigh with slaw.",
            image_url=f"{IMG_BASE}?text=Chicken",
            linked_option_group_ids=burger_groups,
        ),
        MenuItem(
            id="sig-double-beef",
            name="Double Beef Stack",
            price=22.00,
            combo_price=27.00,
            category="Signature Burgers",
            meat_type="Beef",
            image_url=f"{IMG_BASE}?text=Double",
            linked_option_group_ids=signature_groups,
        ),
        MenuItem(
            id="sig-smoky-beef",
            name="Smoky BBQ Beef",
            price=21.00,
            combo_price=26.00,
            category="Signature Burgers",
            meat_type="Beef",
            image_url=f"{IMG_BASE}?text=BBQ",
            linked_option_group_ids=signature_groups,
        ),
        MenuItem(
            id="sig-pork-belly",
            name="Pork Belly Burger",
            price=23.00,
            combo_price=28.00,
            category="Signature Burgers",
            meat_type="Pork",
            image_url=f"{IMG_BASE}?text=Pork",
            linked_option_group_ids=signature_groups,
        ),
        MenuItem(
            id="loaded-fries",
            name="Loaded Fries",
            price=9.00,
            category="Sides",
            image_url=f"{IMG_BASE}?text=Fries",
            options=[
                MenuItemOption(name="Cheese Sauce", price=2.00),
                MenuItemOption(name="Beef Bits", price=3.00),
            ],
        ),
        MenuItem(
            id="mineral-water",
            name="Mineral Water",
            price=2.50,
            category="Drinks",
            image_url=f"{IMG_BASE}?text=Water",
        ),
    ]


def build_demo_backup() -> CatalogBackup:
    """The demo catalog as a backup document."""
    config = StoreConfig(
        currency_symbol=CURRENCY_SYMBOL,
        whatsapp_template=DEFAULT_WHATSAPP_TEMPLATE,
        hero_title="BRAND NAME",
        hero_subtitle="Delicious Burger & Beverages",
        categories=[
            Category(name="Burgers"),
            Category(name="Signature Burgers", tag="NEW", tag_color="#DB0007"),
            Category(name="Sides"),
            Category(name="Drinks"),
        ],
        meat_categories=[
            Category(name="Pork", tag_color="#DB0007"),
            Category(name="Beef", tag_color="#1A1A1A"),
            Category(name="Chicken", tag_color="#FFCB05"),
        ],
        is_store_open=True,
        flow_groups=[
            FlowGroup(
                id="fg-signature",
                name="Signature Burgers",
                triggers=["Signature Burgers"],
                enable_combo_option=True,
            ),
        ],
        option_groups=build_option_groups(),
    )
    outlets = [
        Outlet(
            id="outlet-1",
            name="Main Outlet",
            address="123 Food Street",
            phone="60123456789",
            whatsapp_number="+60123456789",
            opening_time="10:00",
            closing_time="22:00",
            lat=1.5533,
            lng=110.3592,
        ),
    ]
    return CatalogBackup(menu_items=build_menu_items(), config=config, outlets=outlets)
