"""Monobank personal API wrapper and auth helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, NoReturn
from urllib.parse import quote

import httpx
from dotenv import load_dotenv
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from monobank_mcp.errors import TransportError, UpstreamError
from monobank_mcp.schema import ClientInfo, StatementItem

MONOBANK_API_BASE_URL = "https://api.monobank.ua"
MONOBANK_TOKEN_PLACEHOLDER = "X_TOKEN_PLACEHOLDER"
MONOBANK_TOKEN_ENV_VAR = "MONOBANK_API_TOKEN"
MONOBANK_BASE_URL_ENV_VAR = "MONOBANK_API_BASE_URL"
MONOBANK_TIMEOUT_ENV_VAR = "MONOBANK_TIMEOUT_SECONDS"
DEFAULT_TIMEOUT_SECONDS = 20.0
CLIENT_INFO_ENDPOINT = "/personal/client-info"
STATEMENT_ENDPOINT_PREFIX = "/personal/statement"
# Upstream limits; documented for callers, not enforced here.
STATEMENT_RATE_LIMIT_SECONDS = 60
STATEMENT_MAX_PERIOD_SECONDS = 31 * 24 * 60 * 60 + 60 * 60

logger = logging.getLogger(__name__)

_STATEMENT_ITEMS = TypeAdapter(list[StatementItem])


def load_monobank_env() -> None:
    """Load a `.env` from the working directory without overriding real env vars."""
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)


def get_monobank_token_with_source() -> tuple[str, str]:
    """Return the API token and where it came from.

    A missing token is not fatal: the placeholder is sent instead and the
    upstream rejects it, so callers see an authentication error on first use.
    """
    load_monobank_env()

    token = os.getenv(MONOBANK_TOKEN_ENV_VAR)
    if token and token.strip():
        return token.strip(), MONOBANK_TOKEN_ENV_VAR

    logger.warning(
        "%s is not set; requests will use a placeholder token and fail upstream.",
        MONOBANK_TOKEN_ENV_VAR,
    )
    return MONOBANK_TOKEN_PLACEHOLDER, "placeholder"


def get_monobank_token() -> str:
    """Read the Monobank API token, falling back to the placeholder."""
    token, _source = get_monobank_token_with_source()
    return token


def get_monobank_base_url() -> str:
    """Return the API base URL, optionally overridden by environment."""
    configured_url = os.getenv(MONOBANK_BASE_URL_ENV_VAR)
    if configured_url:
        return configured_url.rstrip("/")
    return MONOBANK_API_BASE_URL


def get_timeout_seconds() -> float:
    """Return the HTTP timeout from environment or the default."""
    configured_value = os.getenv(MONOBANK_TIMEOUT_ENV_VAR)
    if configured_value is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        parsed_value = float(configured_value)
    except ValueError as error:
        raise ValueError(
            f"{MONOBANK_TIMEOUT_ENV_VAR} must be a number, got '{configured_value}'."
        ) from error
    if parsed_value <= 0:
        raise ValueError(f"{MONOBANK_TIMEOUT_ENV_VAR} must be positive, got '{configured_value}'.")
    return parsed_value


def build_monobank_client(
    timeout_seconds: float | None = None,
    *,
    trust_env: bool = True,
) -> httpx.Client:
    """Build an authenticated Monobank HTTP client."""
    token = get_monobank_token()
    headers = {
        "Accept": "application/json",
        "X-Token": token,
    }
    return httpx.Client(
        base_url=get_monobank_base_url(),
        headers=headers,
        timeout=timeout_seconds if timeout_seconds is not None else get_timeout_seconds(),
        trust_env=trust_env,
    )


def format_timestamp(value: float) -> str:
    """Render a Unix timestamp for a URL path segment."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def statement_endpoint(account_id: str, from_timestamp: float, to_timestamp: float) -> str:
    """Build the statement endpoint path for one account and period."""
    return (
        f"{STATEMENT_ENDPOINT_PREFIX}/{quote(account_id, safe='')}"
        f"/{format_timestamp(from_timestamp)}/{format_timestamp(to_timestamp)}"
    )


def _raise_http_error(response: httpx.Response, endpoint: str) -> NoReturn:
    """Raise a typed error for a non-success Monobank API response."""
    body = response.text
    raise UpstreamError(
        f"Monobank API request failed with status {response.status_code} "
        f"for '{endpoint}': {body}",
        status_code=response.status_code,
        body=body,
        endpoint=endpoint,
    )


def _request(client: httpx.Client, endpoint: str) -> httpx.Response:
    """Perform one GET request; no retries."""
    logger.debug("GET %s", endpoint)
    try:
        response = client.get(endpoint)
    except httpx.HTTPError as error:
        raise TransportError(
            f"Request to '{endpoint}' failed: {error}",
            endpoint=endpoint,
        ) from error

    if not response.is_success:
        _raise_http_error(response, endpoint)
    return response


def _decode_json(response: httpx.Response, endpoint: str) -> Any:
    """Decode a JSON response body."""
    try:
        return response.json()
    except ValueError as error:
        raise UpstreamError(
            f"Expected JSON body from '{endpoint}'.",
            status_code=response.status_code,
            body=response.text,
            endpoint=endpoint,
        ) from error


def _unexpected_shape(
    error: PydanticValidationError, *, response: httpx.Response, endpoint: str
) -> UpstreamError:
    """Build the error for a response that does not match the documented schema."""
    return UpstreamError(
        f"Unexpected response shape from '{endpoint}': {error.error_count()} invalid field(s).",
        status_code=response.status_code,
        body=response.text,
        endpoint=endpoint,
    )


def fetch_client_info(*, client: httpx.Client) -> ClientInfo:
    """Fetch the client profile with accounts and jars."""
    endpoint = CLIENT_INFO_ENDPOINT
    response = _request(client, endpoint)
    payload = _decode_json(response, endpoint)
    try:
        return ClientInfo.model_validate(payload)
    except PydanticValidationError as error:
        raise _unexpected_shape(error, response=response, endpoint=endpoint) from error


def fetch_statement(
    *,
    client: httpx.Client,
    account_id: str,
    from_timestamp: float,
    to_timestamp: float,
) -> list[StatementItem]:
    """Fetch raw statement items for one account and period, in upstream order."""
    endpoint = statement_endpoint(account_id, from_timestamp, to_timestamp)
    response = _request(client, endpoint)
    payload = _decode_json(response, endpoint)
    try:
        return _STATEMENT_ITEMS.validate_python(payload)
    except PydanticValidationError as error:
        raise _unexpected_shape(error, response=response, endpoint=endpoint) from error
