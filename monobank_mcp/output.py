"""Text rendering of tool payloads and failures."""

from __future__ import annotations

import json
from typing import Any

from monobank_mcp.errors import MonobankToolError, TransportError, UpstreamError

CONNECTION_FAILURE_PREFIX = "Failed to connect to Monobank API: "


def render_payload_text(payload: Any) -> str:
    """Render a tool payload as pretty-printed JSON."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def describe_failure(error: MonobankToolError) -> str:
    """Render a tool failure as the single message returned to the caller."""
    if isinstance(error, (UpstreamError, TransportError)):
        return f"{CONNECTION_FAILURE_PREFIX}{error}"
    return str(error)
