"""
Cart Kernel: Shared Types

Data classes and helpers used across fingerprint, reconciler, adjuster,
renderer, and assembly. These are the contracts that bind the kernel together.

Cart shape (the persisted widget state):
- items: list of CartItem dicts: {name, quantity, ...extra fields}
- any other top-level key (cartId, ...) is opaque host data, passed through
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Sentinels
# ---------------------------------------------------------------------------

# Fingerprint before any tool output has been processed.
TOOL_OUTPUT_UNSET = "__tool_output_unset__"

# Fingerprint of a tool output that could not be serialized.
TOOL_OUTPUT_ERROR = "__tool_output_error__"

ITEMS_KEY = "items"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class CartItem:
    """
    One line of the cart, keyed by `name`.

    `extra` holds every field other than name/quantity. Merges happen
    key-wise on the dict form, so unknown fields survive round trips.
    """

    name: str
    quantity: int = 0
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"name": self.name, "quantity": self.quantity}
        d.update(self.extra)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CartItem:
        extra = {k: v for k, v in d.items() if k not in ("name", "quantity")}
        return cls(
            name=d.get("name") or "",
            quantity=quantity_of(d),
            extra=copy.deepcopy(extra),
        )


@dataclass
class CartView:
    """Everything the host channel currently exposes for one session."""

    session_id: str
    tool_input: Any
    tool_output: Any
    cart: dict[str, Any]

    @property
    def items(self) -> list[dict[str, Any]]:
        return cart_items(self.cart)


@dataclass
class SyncResult:
    """Result of offering the current tool output to the reconciler."""

    cart: dict[str, Any]
    merged: bool
    fingerprint: str


@dataclass
class AdjustResult:
    """Result of a user quantity command."""

    cart: dict[str, Any]
    changed: bool


@dataclass
class RenderOptions:
    """Options controlling what the debug renderer includes in output."""

    title: str = "Shopping Cart"
    include_panels: bool = True
    channel: str = "html"  # "html" or "text"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def empty_cart() -> dict[str, Any]:
    """The cart used when the host has no prior widget state."""
    return {ITEMS_KEY: []}


def cart_items(cart: Any) -> list[Any]:
    """Return the list-shaped `items` of a cart, or [] for anything else."""
    if not isinstance(cart, dict):
        return []
    items = cart.get(ITEMS_KEY)
    return items if isinstance(items, list) else []


def item_name(item: Any) -> str:
    """Identity of an item-shaped record. Empty string when it has none."""
    if not isinstance(item, dict):
        return ""
    name = item.get("name")
    if not isinstance(name, str):
        return ""
    return name


def quantity_of(item: dict[str, Any]) -> int:
    """Current quantity, treating a missing or non-numeric quantity as 0."""
    quantity = item.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        return 0
    return quantity
