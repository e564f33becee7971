"""
Exceptions raised by the customization flow and the cart.

Selection rule violations are not errors (they are silent no-ops); these
exceptions cover calls that cannot be honoured at all.
"""


class FlowClosedError(Exception):
    """Raised when a transition is attempted on a flow that is already closed."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Customization flow for item {item_id} is closed")


class UnknownMenuItemError(Exception):
    """Raised when a menu item id does not exist in the catalog."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Unknown menu item: {item_id}")


class UnknownCartLineError(Exception):
    """Raised when a cart line uuid does not exist in the cart."""

    def __init__(self, uuid: str):
        self.uuid = uuid
        super().__init__(f"Unknown cart line: {uuid}")
