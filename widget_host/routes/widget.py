"""
Widget session routes: the host side of the widget state channel.

Stands in for the chat host during local debugging: stores tool input,
tool output and the persisted cart per session, notifies the assembly when
the tool output changes, and exposes the user +/- commands.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Response, status
from fastapi.responses import HTMLResponse, PlainTextResponse

from cart_engine.kernel.assembly import CartAssembly, InvalidCommand, MemoryChannel
from cart_engine.kernel.types import AdjustResult, RenderOptions
from widget_host.config import settings
from widget_host.models.widget import (
    AdjustRequest,
    AdjustResponse,
    SessionResponse,
    SetValueRequest,
    SetWidgetStateRequest,
    SyncResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["widget"])
channel = MemoryChannel()
assembly = CartAssembly(channel)


def _adjust_response(result: AdjustResult) -> AdjustResponse:
    return AdjustResponse(changed=result.changed, widget_state=result.cart)


@router.get("/{session_id}", status_code=200)
async def get_session(session_id: str) -> SessionResponse:
    """Current tool input, tool output and persisted cart."""
    view = await assembly.load(session_id)
    return SessionResponse(
        session_id=session_id,
        tool_input=view.tool_input,
        tool_output=view.tool_output,
        widget_state=view.cart,
    )


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str) -> Response:
    """Forget a session entirely, including its last processed tool output."""
    channel.clear(session_id)
    assembly.forget(session_id)
    return Response(status_code=204)


@router.put("/{session_id}/tool-input", status_code=200)
async def set_tool_input(session_id: str, req: SetValueRequest) -> SessionResponse:
    """Record the pending tool call. Display only."""
    await channel.set_tool_input(session_id, req.value)
    return await get_session(session_id)


@router.put("/{session_id}/tool-output", status_code=200)
async def set_tool_output(session_id: str, req: SetValueRequest) -> SyncResponse:
    """
    Deliver a tool output and notify the widget.

    Re-sending an identical tool output is accepted but does not merge.
    """
    await channel.set_tool_output(session_id, req.value)
    result = await assembly.sync_tool_output(session_id)
    return SyncResponse(merged=result.merged, widget_state=result.cart)


@router.put("/{session_id}/widget-state", status_code=200)
async def set_widget_state(session_id: str, req: SetWidgetStateRequest) -> SessionResponse:
    """Host-side overwrite of the persisted cart (e.g. restoring a prior turn)."""
    await channel.set_widget_state(session_id, req.state)
    # the host echoes every widget state change as a notification
    await assembly.sync_tool_output(session_id)
    return await get_session(session_id)


@router.post("/{session_id}/adjust", status_code=200)
async def adjust_quantity(session_id: str, req: AdjustRequest) -> AdjustResponse:
    """Apply a signed quantity change to one item."""
    try:
        result = await assembly.adjust_quantity(session_id, req.name, req.delta)
    except InvalidCommand as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    if result.changed:
        await assembly.sync_tool_output(session_id)
    return _adjust_response(result)


@router.post("/{session_id}/items/{name}/increase", status_code=200)
async def increase_item(session_id: str, name: str) -> AdjustResponse:
    """The + control."""
    result = await assembly.increase(session_id, name)
    if result.changed:
        await assembly.sync_tool_output(session_id)
    return _adjust_response(result)


@router.post("/{session_id}/items/{name}/decrease", status_code=200)
async def decrease_item(session_id: str, name: str) -> AdjustResponse:
    """The - control."""
    result = await assembly.decrease(session_id, name)
    if result.changed:
        await assembly.sync_tool_output(session_id)
    return _adjust_response(result)


@router.get("/{session_id}/view")
async def view_session(session_id: str, render_channel: str = Query("html", alias="channel")):
    """Debug view of the widget. ?channel=text for plain text."""
    if render_channel not in ("html", "text"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="channel must be html or text.")

    options = RenderOptions(title=settings.TITLE, channel=render_channel)
    body = await assembly.render(session_id, options)
    logger.debug("widget: rendered %s view for session=%s", render_channel, session_id)
    if render_channel == "text":
        return PlainTextResponse(body)
    return HTMLResponse(body)
