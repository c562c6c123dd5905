"""Tool catalog advertised to MCP clients."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from mcp import types

from monobank_mcp.schema import GetStatementArgs


class ToolName(StrEnum):
    """Names of the operations the server exposes."""

    GET_CLIENT_INFO = "get_client_info"
    GET_STATEMENT = "get_statement"


TOOL_NAMES = frozenset(tool.value for tool in ToolName)

GET_CLIENT_INFO_DESCRIPTION = (
    "Get client information from Monobank API. This tool retrieves information about "
    "the client, their accounts, and jars. It requires a Monobank API token with the "
    "necessary permissions."
)

GET_STATEMENT_DESCRIPTION = (
    "Get account statement for a given period. Rate limit: 1 request per 60 seconds. "
    "Max period: 31 days + 1 hour. Rules: "
    "1. Fetch from default account (account_id = '0') unless another account is specified. "
    "2. Amounts are converted from the smallest currency unit (e.g., kopiyka, cent) to the "
    "main unit and returned as decimals. "
    "3. Transaction timestamps ('time') are converted from Unix timestamps to ISO 8601 "
    "datetime strings (UTC). "
    "4. Fields 'id', 'invoiceId', 'counterEdrpou', and 'counterIban' are omitted from the "
    "returned results."
)


def get_statement_input_schema() -> dict[str, Any]:
    """JSON schema for get_statement, derived from the argument model."""
    schema = GetStatementArgs.model_json_schema()
    properties = {
        name: {key: value for key, value in field_schema.items() if key != "title"}
        for name, field_schema in schema["properties"].items()
    }
    return {
        "type": "object",
        "properties": properties,
        "required": list(schema.get("required", [])),
    }


def list_tools() -> list[types.Tool]:
    """Return the tool catalog in advertisement order."""
    return [
        types.Tool(
            name=ToolName.GET_CLIENT_INFO.value,
            description=GET_CLIENT_INFO_DESCRIPTION,
            inputSchema={"type": "object", "properties": {}, "required": []},
        ),
        types.Tool(
            name=ToolName.GET_STATEMENT.value,
            description=GET_STATEMENT_DESCRIPTION,
            inputSchema=get_statement_input_schema(),
        ),
    ]
