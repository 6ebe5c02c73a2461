"""
Cart Renderer: Debug View Tests

Covers:
  - pretty_json: null, indentation, unserializable placeholder
  - Panels: labels and order
  - HTML: item cards, controls, escaping, empty-cart message
  - Text channel
  - Determinism
"""

import pytest

from cart_engine.kernel.renderer import (
    EMPTY_CART_MESSAGE,
    PANEL_LABELS,
    pretty_json,
    render,
    render_panels,
)
from cart_engine.kernel.types import RenderOptions


class TestPrettyJson:
    def test_none_is_null(self):
        assert pretty_json(None) == "null"

    def test_indented(self):
        assert pretty_json({"a": 1}) == '{\n  "a": 1\n}'

    def test_unserializable_placeholder(self):
        out = pretty_json({"x": object()})

        assert out.startswith("<<unable to render: ")
        assert out.endswith(">>")

    def test_unserializable_is_logged(self, caplog):
        with caplog.at_level("WARNING", logger="cart_engine.kernel.renderer"):
            pretty_json({"x": object()})

        assert "unable to render panel" in caplog.text

    def test_non_ascii_kept(self):
        assert "crème" in pretty_json({"name": "crème fraîche"})


class TestPanels:
    def test_labels_in_order(self):
        panels = render_panels({"q": 1}, None, {"items": []})

        assert [label for label, _ in panels] == list(PANEL_LABELS)
        assert panels[1][1] == "null"


class TestHtml:
    def test_item_cards(self):
        html = render({"items": [{"name": "milk", "quantity": 2}]})

        assert "Cart Items" in html
        assert 'aria-label="Decrease milk"' in html
        assert 'aria-label="Increase milk"' in html
        assert "Quantity: <span" in html
        assert EMPTY_CART_MESSAGE not in html

    def test_empty_cart_message(self):
        assert EMPTY_CART_MESSAGE in render({"items": []})

    @pytest.mark.parametrize("cart", [None, {}, {"items": "x"}, {"items": [{"quantity": 3}]}])
    def test_malformed_cart_renders_empty(self, cart):
        assert EMPTY_CART_MESSAGE in render(cart)

    def test_names_escaped(self):
        html = render({"items": [{"name": "<b>milk</b>", "quantity": 1}]})

        assert "<b>milk</b>" not in html
        assert "&lt;b&gt;milk&lt;/b&gt;" in html

    def test_panels_included_by_default(self):
        html = render({"items": []}, {"query": "milk"}, {"items": []})

        for label in PANEL_LABELS:
            assert label in html
        assert "&quot;query&quot;" in html

    def test_panels_can_be_omitted(self):
        html = render({"items": []}, options=RenderOptions(include_panels=False))

        assert PANEL_LABELS[0] not in html

    def test_title(self):
        html = render({"items": []}, options=RenderOptions(title="Groceries & Co"))

        assert "<title>Groceries &amp; Co</title>" in html

    def test_deterministic(self):
        cart = {"cartId": "c", "items": [{"name": "a", "quantity": 1}, {"name": "b", "quantity": 2}]}

        assert render(cart, {"x": 1}, {"items": []}) == render(cart, {"x": 1}, {"items": []})


class TestText:
    def test_items_listed(self):
        text = render(
            {"items": [{"name": "milk", "quantity": 5}, {"name": "bread", "quantity": 1}]},
            options=RenderOptions(channel="text", include_panels=False),
        )

        assert text.splitlines() == [
            "Shopping Cart",
            "=============",
            "",
            "milk x5  [-] [+]",
            "bread x1  [-] [+]",
        ]

    def test_empty(self):
        text = render({"items": []}, options=RenderOptions(channel="text", include_panels=False))

        assert text.endswith(EMPTY_CART_MESSAGE)

    def test_panels_in_text(self):
        text = render({"items": []}, None, {"items": []}, RenderOptions(channel="text"))

        assert "window.openai.toolInput\nnull" in text
        assert "window.openai.widgetState" in text
