"""Tool output fingerprinting for change detection."""

from __future__ import annotations

import json
import logging
from typing import Any

from cart_engine.kernel.types import TOOL_OUTPUT_ERROR

logger = logging.getLogger(__name__)


def fingerprint(payload: Any) -> str:
    """
    Compute a canonical serialization of a tool output payload.

    Keys are sorted so two payloads with the same content always produce the
    same fingerprint, whatever order the host delivered them in.

    Args:
        payload: The tool output as delivered by the host channel

    Returns:
        Compact JSON string, or TOOL_OUTPUT_ERROR if the payload cannot be
        serialized (non-JSON values, circular references)
    """
    try:
        return json.dumps(payload, sort_keys=True, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        logger.warning("fingerprint: unable to serialize tool output: %s", e)
        return TOOL_OUTPUT_ERROR
