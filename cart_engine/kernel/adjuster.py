"""
Cart Kernel: Quantity Adjuster

Pure function: (base_cart, name, delta) → next cart

The only writer driven by direct user interaction. It never creates items;
it bumps the quantity of an existing one and removes it once the quantity
reaches zero, so no zero-quantity item is ever stored.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from cart_engine.kernel.types import ITEMS_KEY, CartItem, cart_items, item_name

logger = logging.getLogger(__name__)


def adjust(base_cart: Any, name: str, delta: int) -> Any:
    """
    Apply a signed quantity change to the item called `name`.

    No-ops (the base cart is returned as-is):
      - empty name
      - delta == 0
      - no item with that name

    Otherwise returns a new cart. Quantity floors at 0 and an item at 0 is
    removed. Other items keep their order; other top-level fields are kept.
    """
    if not name or delta == 0:
        return base_cart

    items = cart_items(base_cart)
    idx = next((i for i, item in enumerate(items) if item_name(item) == name), -1)
    if idx == -1:
        logger.debug("adjuster: no item named %r, ignoring", name)
        return base_cart

    current = CartItem.from_dict(items[idx])
    next_quantity = max(0, current.quantity + delta)

    next_items = copy.deepcopy(items)
    if next_quantity == 0:
        del next_items[idx]
    else:
        next_items[idx] = {**next_items[idx], "quantity": next_quantity}

    next_cart = {k: copy.deepcopy(v) for k, v in base_cart.items() if k != ITEMS_KEY}
    next_cart[ITEMS_KEY] = next_items
    logger.debug("adjuster: %s %+d -> %d", name, delta, next_quantity)
    return next_cart


def increase(base_cart: Any, name: str) -> Any:
    return adjust(base_cart, name, 1)


def decrease(base_cart: Any, name: str) -> Any:
    return adjust(base_cart, name, -1)
