"""
Pytest configuration and fixtures for widget host tests.
"""

from __future__ import annotations

from uuid import uuid4

import httpx
import pytest_asyncio

from widget_host.main import app


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest_asyncio.fixture
async def session_id(client):
    """A fresh session, removed again after the test."""
    sid = f"sess_{uuid4().hex[:12]}"
    yield sid
    await client.delete(f"/api/sessions/{sid}")
