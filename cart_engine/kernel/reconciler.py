"""
Cart Kernel: Delta Reconciler

Pure function: (base_cart, incoming_items) → next cart

Tool calls deliver "items to add or update" as their output. The reconciler
folds those into the persisted cart:
- items are keyed by name
- incoming fields override existing fields, one-sided fields are kept
- base items keep their position, new names are appended in encounter order
- records without a name are dropped

DeltaGuard sits in front of the reconciler. The host re-notifies on every
widget state change, including our own writes, so the same tool output is
seen many times. Only a tool output whose fingerprint differs from the last
processed one is let through.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from cart_engine.kernel.fingerprint import fingerprint
from cart_engine.kernel.types import (
    ITEMS_KEY,
    TOOL_OUTPUT_UNSET,
    cart_items,
    empty_cart,
    item_name,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_incoming_items(tool_output: Any) -> list[Any]:
    """Pull the list-shaped `items` out of a tool output. Anything else → []."""
    return cart_items(tool_output)


def merge_item(existing: dict[str, Any] | None, incoming: dict[str, Any]) -> dict[str, Any]:
    """Field-wise merge of two records for the same name. Incoming wins."""
    merged = copy.deepcopy(existing) if existing else {}
    merged.update(copy.deepcopy(incoming))
    return merged


def reconcile(base_cart: Any, incoming_items: Any) -> dict[str, Any]:
    """
    Merge incoming item records into a cart.
    Returns a new cart; neither input is modified.

    A base cart that is not a dict is treated as empty_cart(), and
    incoming_items that is not a list as []. Never raises.
    """
    if not isinstance(base_cart, dict):
        base_cart = empty_cart()
    if not isinstance(incoming_items, list):
        incoming_items = []

    by_name: dict[str, dict[str, Any]] = {}
    for item in cart_items(base_cart):
        name = item_name(item)
        if name:
            # Repeated names keep the first slot; the later record's fields win.
            by_name[name] = item

    for item in incoming_items:
        name = item_name(item)
        if not name:
            continue
        by_name[name] = merge_item(by_name.get(name), item)

    next_cart = {k: copy.deepcopy(v) for k, v in base_cart.items() if k != ITEMS_KEY}
    next_cart[ITEMS_KEY] = [copy.deepcopy(item) for item in by_name.values()]
    return next_cart


# ---------------------------------------------------------------------------
# Change detection
# ---------------------------------------------------------------------------


class DeltaGuard:
    """
    Remembers the fingerprint of the last processed tool output.

    should_process() answers True exactly once per distinct payload value in
    a row; repeats (including echoes of our own widget state writes) are
    skipped.
    """

    __slots__ = ("last_fingerprint",)

    def __init__(self) -> None:
        self.last_fingerprint = TOOL_OUTPUT_UNSET

    def should_process(self, tool_output: Any) -> bool:
        if tool_output is None:
            return False

        current = fingerprint(tool_output)
        if current == self.last_fingerprint:
            logger.debug("reconciler: tool output unchanged, skipping merge")
            return False

        self.last_fingerprint = current
        return True

    def reset(self) -> None:
        self.last_fingerprint = TOOL_OUTPUT_UNSET

    def __repr__(self) -> str:  # pragma: no cover
        return f"DeltaGuard(last_fingerprint={self.last_fingerprint!r})"
