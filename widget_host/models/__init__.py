"""
Pydantic models for the cart widget host.

All data shapes defined here. No imports from routes.
"""

from widget_host.models.widget import (
    AdjustRequest,
    AdjustResponse,
    SessionResponse,
    SetValueRequest,
    SetWidgetStateRequest,
    SyncResponse,
)

__all__ = [
    "AdjustRequest",
    "AdjustResponse",
    "SessionResponse",
    "SetValueRequest",
    "SetWidgetStateRequest",
    "SyncResponse",
]
