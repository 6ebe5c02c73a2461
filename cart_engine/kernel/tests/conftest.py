"""
Cart kernel test configuration.

Shared cart fixtures. Assembly tests use MemoryChannel and run under
pytest-asyncio auto mode from pyproject.toml.
"""

import pytest

from cart_engine.kernel.assembly import CartAssembly, MemoryChannel


@pytest.fixture
def milk_cart():
    return {"items": [{"name": "milk", "quantity": 2}]}


@pytest.fixture
def channel():
    return MemoryChannel()


@pytest.fixture
def assembly(channel):
    return CartAssembly(channel)
