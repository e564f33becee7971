"""
Catalog Schemas for the Storefront
==================================

This module defines the Pydantic models for the storefront catalog: menu
items, option groups and their options, categories, flow groups, outlets and
the store-wide configuration.

Catalog Concepts:
-----------------
1. **Menu Items**: Products a customer can order. An item has a base price,
   an optional combo price, and an ordered list of linked option groups that
   defines the steps of its customization flow.

2. **Option Groups**: A named set of options shown as one flow step. Groups
   carry the selection rules (required, max selection, quantity mode) and a
   display mode that decides whether the step appears in ala carte flows,
   combo flows, or both.

3. **Options**: A single choice inside a group. The option name is its
   identity inside the group; the price is a delta on top of the item price.
   An option flagged ``is_combo_trigger`` switches the flow to combo mode.

4. **Flow Groups**: Category-level triggers. Items in a triggering category
   start with a Variation step listing sibling items.

Field Naming:
-------------
Models serialize with camelCase aliases (``linkedOptionGroupIds``,
``isComboTrigger``) so JSON backups from the storefront frontend load
unchanged. Python code uses the snake_case attribute names; both spellings
are accepted on input.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..validators import normalize_whatsapp_number


class CatalogModel(BaseModel):
    """Base model with camelCase aliases for catalog JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OptionType(str, Enum):
    """How an option is presented on the order message."""
    ADDON = "addon"
    PREFERENCE = "preference"


class DisplayMode(str, Enum):
    """Which flow modes show an option group's step."""
    BOTH = "both"
    COMBO = "combo"
    ALA_CARTE = "alaCarte"


class FlowMode(str, Enum):
    """Pricing and step-filtering mode of a customization flow."""
    ALA_CARTE = "alaCarte"
    COMBO = "combo"


class MenuItemOption(CatalogModel):
    """
    A selectable option inside an option group (or inline on an item).

    Frozen so that options shared between the catalog, flow history and cart
    lines cannot be mutated through one of them. Equality is by value, which
    the cart relies on when merging lines.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    price: float = 0.0
    type: OptionType = OptionType.ADDON
    image_url: Optional[str] = None
    description: Optional[str] = None
    is_combo_trigger: bool = False


class OptionGroup(CatalogModel):
    """
    A group of options presented as one step of the customization flow.

    Attributes:
        id: Identifier referenced by MenuItem.linked_option_group_ids
        name: Step title shown to the customer
        options: Ordered options; names must be unique within the group
        is_required: Next stays disabled until something is selected
        max_selection: 0 means unlimited, 1 means single-choice (replace)
        display_mode: both / combo / alaCarte
        is_customization: Shown only through the review screen's Customize
            action, never as a main flow step
        allow_quantity: One option may be selected several times, up to
            max_selection in total
    """
    id: str
    name: str
    options: List[MenuItemOption] = Field(default_factory=list)
    is_required: bool = False
    max_selection: int = 0
    display_mode: DisplayMode = DisplayMode.BOTH
    is_customization: bool = False
    allow_quantity: bool = False

    @property
    def is_single_choice(self) -> bool:
        return self.max_selection == 1

    def shows_in(self, mode: FlowMode) -> bool:
        """Check whether this group's step is part of a flow in the given mode."""
        return self.display_mode == DisplayMode.BOTH or self.display_mode.value == mode.value

    def find_option(self, name: str) -> Optional[MenuItemOption]:
        """Look up an option by name."""
        for option in self.options:
            if option.name == name:
                return option
        return None


class MenuItem(CatalogModel):
    """
    A product on the menu.

    The order of ``linked_option_group_ids`` is the order of the flow steps.
    Inline ``options`` are used only when no groups are linked, as a single
    fallback "Addon" step.
    """
    id: str
    name: str
    price: float
    combo_price: Optional[float] = None
    description: str = ""
    category: str = ""
    meat_type: str = ""
    code: Optional[str] = None
    tag: Optional[str] = None
    image_url: str = ""
    options: List[MenuItemOption] = Field(default_factory=list)
    linked_option_group_ids: List[str] = Field(default_factory=list)
    is_hidden: bool = False
    availability_outlets: List[str] = Field(default_factory=list)

    def is_available_at(self, outlet_id: Optional[str]) -> bool:
        """Items with no outlet restriction are available everywhere."""
        if not outlet_id or not self.availability_outlets:
            return True
        return outlet_id in self.availability_outlets


class Category(CatalogModel):
    """A menu category (also used for meat categories)."""
    name: str
    tag: Optional[str] = None
    tag_color: Optional[str] = None
    default_options: List[MenuItemOption] = Field(default_factory=list)


class FlowGroup(CatalogModel):
    """
    Category-level flow trigger.

    Items whose category is listed in ``triggers`` open a flow that starts
    with a Variation step. With ``enable_combo_option`` the flow switches to
    combo mode once the variation is chosen.
    """
    id: str
    name: str
    triggers: List[str] = Field(default_factory=list)
    enable_combo_option: bool = False
    ala_carte_steps: List[str] = Field(default_factory=list)
    combo_steps: List[str] = Field(default_factory=list)

    def steps_for(self, mode: FlowMode) -> List[str]:
        return self.combo_steps if mode == FlowMode.COMBO else self.ala_carte_steps


class Outlet(CatalogModel):
    """A physical store location that receives WhatsApp orders."""
    id: str
    name: str
    address: str = ""
    phone: str = ""
    whatsapp_number: str = ""
    is_active: bool = True
    opening_time: str = "10:00"
    closing_time: str = "22:00"
    lat: Optional[float] = None
    lng: Optional[float] = None

    @field_validator("whatsapp_number")
    @classmethod
    def normalize_whatsapp(cls, v: str) -> str:
        """Store WhatsApp numbers in E.164 form; invalid numbers are rejected."""
        return normalize_whatsapp_number(v)


class OutletOut(Outlet):
    """Outlet as listed on the storefront, with its current opening status."""
    is_open: bool = False


class StoreConfig(CatalogModel):
    """Store-wide configuration edited from the back office."""
    currency_symbol: str = "RM"
    whatsapp_template: str = ""
    hero_title: str = ""
    hero_subtitle: str = ""
    categories: List[Category] = Field(default_factory=list)
    meat_categories: List[Category] = Field(default_factory=list)
    is_store_open: bool = True
    flow_groups: List[FlowGroup] = Field(default_factory=list)
    option_groups: List[OptionGroup] = Field(default_factory=list)


class CatalogBackup(CatalogModel):
    """Full catalog export/import document."""
    menu_items: List[MenuItem] = Field(default_factory=list)
    config: StoreConfig = Field(default_factory=StoreConfig)
    outlets: List[Outlet] = Field(default_factory=list)


class MenuItemUpdate(CatalogModel):
    """
    Request model for partially updating a menu item.

    Only provided (non-None) fields are applied.
    """
    name: Optional[str] = None
    price: Optional[float] = None
    combo_price: Optional[float] = None
    description: Optional[str] = None
    category: Optional[str] = None
    meat_type: Optional[str] = None
    image_url: Optional[str] = None
    options: Optional[List[MenuItemOption]] = None
    linked_option_group_ids: Optional[List[str]] = None
    is_hidden: Optional[bool] = None
    availability_outlets: Optional[List[str]] = None


class MenuItemCreate(MenuItem):
    """Request model for creating a menu item; an id is generated when omitted."""
    id: Optional[str] = None


class OptionGroupCreate(OptionGroup):
    """Request model for creating an option group; an id is generated when omitted."""
    id: Optional[str] = None


class MoveRequest(CatalogModel):
    direction: Literal["up", "down"]
