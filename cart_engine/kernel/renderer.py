"""
Cart Kernel: Debug Renderer

Pure function: (cart, tool_input, tool_output, options?) → HTML string (or text string)
No IO. Deterministic: same input → same output, always.

The page has two parts:
- Cart Items: one card per item with name, quantity and -/+ controls
- JSON panels: pretty-printed toolInput, toolOutput and widgetState
"""

from __future__ import annotations

import json
import logging
from html import escape as _html_escape
from typing import Any

import chevron

from cart_engine.kernel.types import CartItem, RenderOptions, cart_items, item_name

logger = logging.getLogger(__name__)

EMPTY_CART_MESSAGE = (
    "The cart is empty. Tool calls that return widget state will populate this section."
)

PANEL_LABELS = (
    "window.openai.toolInput",
    "window.openai.toolOutput",
    "window.openai.widgetState",
)

_ITEM_CARD_HTML = """\
      <div class="cart-item" data-name="{{name}}">
        <div>
          <p class="cart-item-name">{{name}}</p>
          <p class="cart-item-quantity">Quantity: <span class="mono">{{quantity}}</span></p>
        </div>
        <div class="cart-item-controls">
          <button type="button" data-action="decrease" data-name="{{name}}" aria-label="Decrease {{name}}">-</button>
          <button type="button" data-action="increase" data-name="{{name}}" aria-label="Increase {{name}}">+</button>
        </div>
      </div>"""

_PANEL_HTML = """\
    <section class="json-panel">
      <header><p class="panel-label">{{label}}</p></header>
      <pre>{{pretty}}</pre>
    </section>"""

_ITEM_LINE_TEXT = "{{{name}}} x{{quantity}}  [-] [+]"

_CSS = """\
    body { margin: 0; background: #020617; color: #f8fafc; font-family: system-ui, sans-serif; }
    .cart-page { max-width: 64rem; margin: 0 auto; padding: 1.5rem 1rem; display: flex; flex-direction: column; gap: 1rem; }
    .panel-label { font-size: 0.875rem; font-weight: 600; text-transform: uppercase; letter-spacing: 0.1em; color: #94a3b8; }
    .cart-items { display: grid; gap: 1rem; grid-template-columns: repeat(auto-fill, minmax(18rem, 1fr)); }
    .cart-item { display: flex; align-items: center; justify-content: space-between; border-radius: 1rem; padding: 1rem; background: rgba(30, 41, 59, 0.7); }
    .cart-item-name { font-weight: 600; margin: 0; }
    .cart-item-quantity { font-size: 0.875rem; color: #cbd5e1; margin: 0; }
    .cart-item-controls button { width: 2rem; height: 2rem; border-radius: 9999px; border: 1px solid rgba(255, 255, 255, 0.3); background: none; color: #fff; }
    .cart-empty { border: 1px dashed rgba(255, 255, 255, 0.2); border-radius: 1rem; padding: 1.5rem; text-align: center; color: #cbd5e1; }
    .json-panel { border-radius: 1rem; padding: 1rem; background: rgba(15, 23, 42, 0.7); }
    .json-panel pre, .mono { font-family: ui-monospace, monospace; font-size: 0.75rem; }
    .json-panel pre { overflow: auto; padding: 0.75rem; border-radius: 0.5rem; background: rgba(0, 0, 0, 0.4); }"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def pretty_json(value: Any) -> str:
    """
    Indented JSON for a debug panel.
    None renders as "null"; values that cannot be serialized render as a
    placeholder instead of raising.
    """
    if value is None:
        return "null"
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.warning("renderer: unable to render panel: %s", e)
        return f"<<unable to render: {e}>>"


def render_panels(tool_input: Any, tool_output: Any, widget_state: Any) -> list[tuple[str, str]]:
    """(label, pretty JSON) for each of the three debug panels, in display order."""
    values = (tool_input, tool_output, widget_state)
    return [(label, pretty_json(value)) for label, value in zip(PANEL_LABELS, values)]


def render(
    cart: Any,
    tool_input: Any = None,
    tool_output: Any = None,
    options: RenderOptions | None = None,
) -> str:
    """
    Render the cart widget debug view.
    Pure function. No side effects. No IO.
    """
    opts = options or RenderOptions()

    if opts.channel == "text":
        return _render_text(cart, tool_input, tool_output, opts)

    return _render_html(cart, tool_input, tool_output, opts)


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------


def _render_html(cart: Any, tool_input: Any, tool_output: Any, opts: RenderOptions) -> str:
    parts: list[str] = []

    parts.append("<!DOCTYPE html>")
    parts.append('<html lang="en">')
    parts.append("<head>")
    parts.append('  <meta charset="utf-8">')
    parts.append('  <meta name="viewport" content="width=device-width, initial-scale=1">')
    parts.append(f"  <title>{escape(opts.title)}</title>")
    parts.append("  <style>")
    parts.append(_CSS)
    parts.append("  </style>")
    parts.append("</head>")
    parts.append("<body>")
    parts.append('  <main class="cart-page">')

    parts.append('    <section class="cart-section">')
    parts.append('      <header><p class="panel-label">Cart Items</p></header>')
    parts.append(_render_items_html(cart))
    parts.append("    </section>")

    if opts.include_panels:
        for label, pretty in render_panels(tool_input, tool_output, cart):
            parts.append(chevron.render(_PANEL_HTML, {"label": label, "pretty": pretty}))

    parts.append("  </main>")
    parts.append("</body>")
    parts.append("</html>")

    return "\n".join(parts)


def _render_items_html(cart: Any) -> str:
    cards = [chevron.render(_ITEM_CARD_HTML, ctx) for ctx in _item_contexts(cart)]
    if not cards:
        return f'    <p class="cart-empty">{escape(EMPTY_CART_MESSAGE)}</p>'
    return '    <div class="cart-items">\n' + "\n".join(cards) + "\n    </div>"


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def _render_text(cart: Any, tool_input: Any, tool_output: Any, opts: RenderOptions) -> str:
    """Render the widget as plain text (terminal, logs)."""
    parts: list[str] = []

    parts.append(opts.title)
    parts.append("=" * len(opts.title))
    parts.append("")

    lines = [chevron.render(_ITEM_LINE_TEXT, ctx) for ctx in _item_contexts(cart)]
    parts.extend(lines or [EMPTY_CART_MESSAGE])
    parts.append("")

    if opts.include_panels:
        for label, pretty in render_panels(tool_input, tool_output, cart):
            parts.append(label)
            parts.append(pretty)
            parts.append("")

    return "\n".join(parts).rstrip()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _item_contexts(cart: Any) -> list[dict[str, Any]]:
    """Template context per displayable item. Nameless records are not shown."""
    contexts: list[dict[str, Any]] = []
    for raw in cart_items(cart):
        if not item_name(raw):
            continue
        item = CartItem.from_dict(raw)
        contexts.append({"name": item.name, "quantity": item.quantity})
    return contexts


def escape(text: str) -> str:
    """HTML-escape a string for safe embedding."""
    return _html_escape(str(text), quote=True)
