"""Message-key types used by the tests.

The decorated ones live in the process-wide registry and are resolved by
dotted name in the name-resolution and CLI tests.
"""

from enum import Enum, auto

from catalog_verifier import message_catalog


class Messages(Enum):
    """Two-key message type; tests register it in their own registry."""
    GREETING = "greeting"
    FAREWELL = "farewell"


class Empty(Enum):
    """Message type without any keys."""


class ClosedKeys:
    """Closed string set that is not an Enum."""

    @classmethod
    def message_keys(cls):
        return ("title", "subtitle")


@message_catalog("shop.messages", locales=["en", "fr"])
class ShopMessages(Enum):
    CART_EMPTY = auto()
    CHECKOUT = auto()


@message_catalog(locales=["en"])
class NamelessMessages(Enum):
    ORPHAN = auto()


@message_catalog("shop.messages")
class LocalelessMessages(Enum):
    CART_EMPTY = auto()
    CHECKOUT = auto()


NOT_A_TYPE = "shop.messages"
