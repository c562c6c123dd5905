"""Tool dispatch: argument validation, upstream call and response reshaping."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from monobank_mcp.errors import UnknownOperationError, ValidationError
from monobank_mcp.monobank_client import fetch_client_info, fetch_statement
from monobank_mcp.schema import GetStatementArgs, NormalizedStatementItem, StatementItem
from monobank_mcp.tools import TOOL_NAMES, ToolName

logger = logging.getLogger(__name__)


def parse_statement_arguments(arguments: object) -> GetStatementArgs:
    """Validate raw get_statement arguments before any network I/O."""
    if arguments is None:
        arguments = {}
    try:
        return GetStatementArgs.model_validate(arguments)
    except PydanticValidationError as error:
        problems: list[str] = []
        fields: list[str] = []
        for detail in error.errors():
            location = detail.get("loc") or ()
            field_name = str(location[0]) if location else "arguments"
            if field_name not in fields:
                fields.append(field_name)
            problems.append(f"{field_name}: {detail.get('msg', 'invalid value')}")
        raise ValidationError(
            f"Invalid arguments for {ToolName.GET_STATEMENT}: {'; '.join(problems)}",
            fields=fields,
        ) from error


def normalize_statement(items: list[StatementItem]) -> list[dict[str, Any]]:
    """Reshape raw statement items into caller payloads, preserving order."""
    return [NormalizedStatementItem.from_statement_item(item).to_payload() for item in items]


class ToolDispatcher:
    """Executes catalog operations against one Monobank HTTP client."""

    def __init__(
        self,
        client: httpx.Client,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self._clock = clock

    def get_client_info(self) -> dict[str, object]:
        """Return the client profile exactly as the upstream reported it."""
        return fetch_client_info(client=self._client).to_payload()

    def get_statement(self, arguments: object) -> list[dict[str, Any]]:
        """Return normalized statement items for the requested account and period."""
        parsed = parse_statement_arguments(arguments)
        to_timestamp = parsed.to_timestamp or float(int(self._clock()))
        items = fetch_statement(
            client=self._client,
            account_id=parsed.account_id,
            from_timestamp=parsed.from_timestamp,
            to_timestamp=to_timestamp,
        )
        logger.info(
            "Fetched %d statement item(s) for account '%s'.", len(items), parsed.account_id
        )
        return normalize_statement(items)

    def dispatch(self, name: str, arguments: Mapping[str, Any] | None = None) -> Any:
        """Route a tool call by name and return its JSON-serializable payload."""
        if name not in TOOL_NAMES:
            raise UnknownOperationError(name)

        logger.debug("Dispatching tool '%s'.", name)
        if name == ToolName.GET_CLIENT_INFO:
            return self.get_client_info()
        return self.get_statement(arguments)
