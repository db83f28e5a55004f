"""GraphQL traffic capture for debugging and fixture generation.

When DOCS_REVIEW_LOG_API is set to a truthy value, every request sent by
GitHubClient and the response it gets back are written as JSON files to
DOCS_REVIEW_LOG_API_DIR (default ~/.docs-review/api_logs/):

- {sequence:04d}_{operation}_request.json
- {sequence:04d}_{operation}_response.json

where operation is the first top-level field of the GraphQL document
(e.g. "organization", "addProjectV2ItemById"). Authorization headers are
redacted.
"""

import itertools
import json
import logging
import os
import re
from datetime import UTC, datetime
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

_sequence = itertools.count(1)

SENSITIVE_HEADERS = {"authorization", "x-github-token"}

_OPERATION_RE = re.compile(r"^\s*(?:query|mutation)\b[^{]*\{\s*(?:\w+\s*:\s*)?(\w+)", re.DOTALL)


def is_api_logging_enabled() -> bool:
    value = os.environ.get("DOCS_REVIEW_LOG_API", "").lower()
    return value in ("1", "true", "yes", "on")


def get_log_directory() -> Path:
    custom_dir = os.environ.get("DOCS_REVIEW_LOG_API_DIR")
    if custom_dir:
        return Path(custom_dir)
    return Path.home() / ".docs-review" / "api_logs"


def sanitize_headers(headers: httpx.Headers | dict) -> dict:
    """Copy headers, keeping the auth scheme but masking the credential."""
    result = dict(headers)
    for key, value in result.items():
        if key.lower() in SENSITIVE_HEADERS and isinstance(value, str):
            scheme, _, credential = value.partition(" ")
            result[key] = f"{scheme} [REDACTED]" if credential else "[REDACTED]"
    return result


def operation_name(body: object) -> str:
    """Name a GraphQL request body after its first top-level field."""
    if isinstance(body, dict):
        match = _OPERATION_RE.match(body.get("query") or "")
        if match:
            return match.group(1)
    return "request"


def _write(filename: str, data: dict) -> None:
    log_dir = get_log_directory()
    log_dir.mkdir(parents=True, exist_ok=True)
    filepath = log_dir / filename
    filepath.write_text(json.dumps(data, indent=2, default=str))
    logger.debug("Logged API traffic to %s", filepath)


def _timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def _decode_body(content: bytes) -> object:
    try:
        return json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return content.decode("utf-8", errors="replace")


def log_request(request: httpx.Request) -> None:
    """Write a request to the log directory and tag it for its response."""
    body = _decode_body(request.content) if request.content else None
    seq = next(_sequence)
    operation = operation_name(body)
    request.extensions["log_prefix"] = f"{seq:04d}_{operation}"

    try:
        _write(
            f"{seq:04d}_{operation}_request.json",
            {
                "sequence": seq,
                "timestamp": _timestamp(),
                "method": request.method,
                "url": str(request.url),
                "headers": sanitize_headers(request.headers),
                "body": body,
            },
        )
    except OSError as e:
        logger.warning("Failed to log API request: %s", e)


def log_response(response: httpx.Response) -> None:
    """Write a response next to the request that produced it."""
    prefix = response.request.extensions.get("log_prefix") or f"{next(_sequence):04d}_request"

    try:
        _write(
            f"{prefix}_response.json",
            {
                "timestamp": _timestamp(),
                "status_code": response.status_code,
                "url": str(response.url),
                "headers": dict(response.headers),
                "body": _decode_body(response.content),
            },
        )
    except OSError as e:
        logger.warning("Failed to log API response: %s", e)


class LoggingTransport(httpx.BaseTransport):
    """Transport wrapper that records each request/response pair."""

    def __init__(self, transport: httpx.BaseTransport | None = None):
        self._transport = transport or httpx.HTTPTransport()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        log_request(request)
        response = self._transport.handle_request(request)
        # The client attaches the request only after the transport returns
        response.request = request
        # httpx streams by default; the body has to be read before it can be logged
        response.read()
        log_response(response)
        return response

    def close(self) -> None:
        self._transport.close()


def create_logging_client(
    headers: dict | None = None,
    timeout: float = 30.0,
    **kwargs,
) -> httpx.Client:
    """Create an httpx Client, wrapped in LoggingTransport when capture is enabled."""
    if is_api_logging_enabled():
        kwargs.setdefault("transport", LoggingTransport())
    return httpx.Client(headers=headers, timeout=timeout, **kwargs)
