"""
Cart Kernel: the pure engine.

Components:
  reconciler  (cart, incoming items) → cart, plus the tool output DeltaGuard
  adjuster    (cart, name, delta) → cart
  renderer    (cart, tool input, tool output) → HTML or text debug view
  assembly    coordinates the above with the host widget state channel
"""

from cart_engine.kernel.adjuster import adjust, decrease, increase
from cart_engine.kernel.assembly import CartAssembly, InvalidCommand, MemoryChannel, WidgetChannel
from cart_engine.kernel.fingerprint import fingerprint
from cart_engine.kernel.reconciler import DeltaGuard, extract_incoming_items, reconcile
from cart_engine.kernel.renderer import pretty_json, render
from cart_engine.kernel.types import CartItem, empty_cart

__all__ = [
    "reconcile",
    "extract_incoming_items",
    "DeltaGuard",
    "fingerprint",
    "adjust",
    "increase",
    "decrease",
    "render",
    "pretty_json",
    "empty_cart",
    "CartItem",
    "CartAssembly",
    "MemoryChannel",
    "WidgetChannel",
    "InvalidCommand",
]
