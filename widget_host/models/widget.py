"""Widget session models for the debug host API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SetValueRequest(BaseModel):
    """What the host sends to PUT tool-input / tool-output."""

    model_config = {"extra": "forbid"}

    value: Any = None


class SetWidgetStateRequest(BaseModel):
    """Host-side overwrite of the persisted cart."""

    model_config = {"extra": "forbid"}

    state: dict[str, Any]


class AdjustRequest(BaseModel):
    """A user quantity command."""

    model_config = {"extra": "forbid"}

    name: str = Field(max_length=500)
    delta: int = Field(strict=True)


class SessionResponse(BaseModel):
    """Everything the host channel exposes for one session."""

    session_id: str
    tool_input: Any = None
    tool_output: Any = None
    widget_state: dict[str, Any]


class SyncResponse(BaseModel):
    """What PUT tool-output returns after offering it to the reconciler."""

    merged: bool
    widget_state: dict[str, Any]


class AdjustResponse(BaseModel):
    """What the quantity endpoints return."""

    changed: bool
    widget_state: dict[str, Any]
