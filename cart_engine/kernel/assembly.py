"""
Cart Kernel: Assembly Layer

Sits between the pure functions (reconciler, adjuster, renderer) and the
host-managed widget state channel. Coordinates the two producers that write
the persisted cart:

  tool output changed  → guard → reconcile against current state → write
  user quantity command → adjust → write

This is where IO happens. The reconciler, adjuster and renderer are pure.
Each write is the full next document; the channel is last-write-wins.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any

from cart_engine.kernel.adjuster import adjust
from cart_engine.kernel.reconciler import DeltaGuard, extract_incoming_items, reconcile
from cart_engine.kernel.renderer import render
from cart_engine.kernel.types import (
    AdjustResult,
    CartView,
    RenderOptions,
    SyncResult,
    empty_cart,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class InvalidCommand(ValueError):
    """A user quantity command that cannot be interpreted."""

    pass


# ---------------------------------------------------------------------------
# Channel protocol
# ---------------------------------------------------------------------------


class WidgetChannel:
    """
    Abstract host channel interface.
    The host owns tool input, tool output and the persisted widget state;
    the widget holds only a transient read/write handle.
    """

    async def get_tool_input(self, session_id: str) -> Any:
        """Opaque description of the pending tool call. None if absent."""
        raise NotImplementedError

    async def get_tool_output(self, session_id: str) -> Any:
        """Latest tool output (the delta payload). None if absent."""
        raise NotImplementedError

    async def get_widget_state(self, session_id: str) -> dict[str, Any] | None:
        """Persisted cart document. None if the host has no prior state."""
        raise NotImplementedError

    async def set_widget_state(self, session_id: str, state: dict[str, Any]) -> None:
        """Replace the persisted cart document."""
        raise NotImplementedError


class MemoryChannel(WidgetChannel):
    """In-memory host channel for the debug host and tests."""

    def __init__(self) -> None:
        self.tool_inputs: dict[str, Any] = {}
        self.tool_outputs: dict[str, Any] = {}
        self.widget_states: dict[str, dict[str, Any]] = {}
        self.writes: dict[str, int] = {}

    async def get_tool_input(self, session_id: str) -> Any:
        return copy.deepcopy(self.tool_inputs.get(session_id))

    async def get_tool_output(self, session_id: str) -> Any:
        return copy.deepcopy(self.tool_outputs.get(session_id))

    async def get_widget_state(self, session_id: str) -> dict[str, Any] | None:
        return copy.deepcopy(self.widget_states.get(session_id))

    async def set_widget_state(self, session_id: str, state: dict[str, Any]) -> None:
        self.widget_states[session_id] = copy.deepcopy(state)
        self.writes[session_id] = self.writes.get(session_id, 0) + 1

    async def set_tool_input(self, session_id: str, value: Any) -> None:
        self.tool_inputs[session_id] = copy.deepcopy(value)

    async def set_tool_output(self, session_id: str, value: Any) -> None:
        self.tool_outputs[session_id] = copy.deepcopy(value)

    def write_count(self, session_id: str) -> int:
        return self.writes.get(session_id, 0)

    def clear(self, session_id: str) -> None:
        """Drop everything held for a session."""
        self.tool_inputs.pop(session_id, None)
        self.tool_outputs.pop(session_id, None)
        self.widget_states.pop(session_id, None)
        self.writes.pop(session_id, None)


# ---------------------------------------------------------------------------
# Assembly class
# ---------------------------------------------------------------------------


class CartAssembly:
    """
    Manages the persisted cart of each widget session.
    Coordinates guard + reconciler + adjuster + channel.
    """

    def __init__(self, channel: WidgetChannel):
        self._channel = channel
        self._locks: dict[str, asyncio.Lock] = {}
        self._guards: dict[str, DeltaGuard] = {}

    def _get_lock(self, session_id: str) -> asyncio.Lock:
        """Per-session lock: both producers go through one read-compute-write."""
        if session_id not in self._locks:
            self._locks[session_id] = asyncio.Lock()
        return self._locks[session_id]

    def _get_guard(self, session_id: str) -> DeltaGuard:
        if session_id not in self._guards:
            self._guards[session_id] = DeltaGuard()
        return self._guards[session_id]

    async def _current_cart(self, session_id: str) -> dict[str, Any]:
        state = await self._channel.get_widget_state(session_id)
        if not isinstance(state, dict):
            return empty_cart()
        return state

    # -- load --

    async def load(self, session_id: str) -> CartView:
        """Read everything the host exposes for a session."""
        return CartView(
            session_id=session_id,
            tool_input=await self._channel.get_tool_input(session_id),
            tool_output=await self._channel.get_tool_output(session_id),
            cart=await self._current_cart(session_id),
        )

    # -- sync --

    async def sync_tool_output(self, session_id: str) -> SyncResult:
        """
        Handle a host notification: merge the tool output into the persisted
        cart if it differs from the last one processed for this session.

        The base is always the cart read from the channel under the lock,
        never a snapshot taken before a local edit.
        """
        async with self._get_lock(session_id):
            guard = self._get_guard(session_id)
            tool_output = await self._channel.get_tool_output(session_id)

            if not guard.should_process(tool_output):
                return SyncResult(
                    cart=await self._current_cart(session_id),
                    merged=False,
                    fingerprint=guard.last_fingerprint,
                )

            base = await self._current_cart(session_id)
            incoming = extract_incoming_items(tool_output)
            next_cart = reconcile(base, incoming)
            await self._channel.set_widget_state(session_id, next_cart)

            logger.info(
                "assembly: merged %d incoming items into session=%s (%d items)",
                len(incoming),
                session_id,
                len(next_cart["items"]),
            )
            return SyncResult(cart=next_cart, merged=True, fingerprint=guard.last_fingerprint)

    # -- adjust --

    async def adjust_quantity(self, session_id: str, name: str, delta: int) -> AdjustResult:
        """
        Apply a user quantity command and write the result through.
        No-op commands (empty name, zero delta, unknown item) do not write.
        """
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise InvalidCommand(f"delta must be an integer, got {delta!r}")

        async with self._get_lock(session_id):
            base = await self._current_cart(session_id)
            next_cart = adjust(base, name, delta)
            if next_cart is base:
                logger.debug("assembly: adjust %r %+d is a no-op for session=%s", name, delta, session_id)
                return AdjustResult(cart=base, changed=False)

            await self._channel.set_widget_state(session_id, next_cart)
            logger.info("assembly: adjusted %r by %+d in session=%s", name, delta, session_id)
            return AdjustResult(cart=next_cart, changed=True)

    async def increase(self, session_id: str, name: str) -> AdjustResult:
        return await self.adjust_quantity(session_id, name, 1)

    async def decrease(self, session_id: str, name: str) -> AdjustResult:
        return await self.adjust_quantity(session_id, name, -1)

    # -- housekeeping --

    def forget(self, session_id: str) -> None:
        """Drop the remembered fingerprint so the next tool output merges again."""
        self._guards.pop(session_id, None)
        lock = self._locks.get(session_id)
        if lock is not None and not lock.locked():
            del self._locks[session_id]

    # -- render --

    async def render(self, session_id: str, options: RenderOptions | None = None) -> str:
        view = await self.load(session_id)
        return render(view.cart, view.tool_input, view.tool_output, options)
