"""
Result normalization.

Turns a raw transport outcome into either the caller's expected value or an
ErrorResult, so that every API call resolves with exactly one of the two
regardless of where a failure came from.
"""

import json
import logging
from typing import Any, Callable

from ..core.models import ErrorResult
from ..transport.base import RawResponse, TransportError

logger = logging.getLogger(__name__)

ResponseType = Callable[[Any], Any] | type | None


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def decode_body(content: bytes) -> Any:
    """
    Decode a JSON body.

    Returns:
        The decoded value, or None for an empty body

    Raises:
        ValueError: If the body is not valid JSON
    """
    if not content or not content.strip():
        return None
    return json.loads(content)


def _flatten_errors(errors: Any) -> dict[str, str]:
    # {"Field": ["msg1", "msg2"]} or {"Field": "msg"}
    if not isinstance(errors, dict):
        return {}

    flattened = {}
    for field_name, messages in errors.items():
        if isinstance(messages, (list, tuple)):
            flattened[str(field_name)] = "; ".join(str(m) for m in messages)
        elif messages is not None:
            flattened[str(field_name)] = str(messages)
    return flattened


def _optional_str(value: Any) -> str | None:
    return str(value) if value not in (None, "") else None


def error_from_body(status_code: int, content: bytes) -> ErrorResult:
    """
    Build an ErrorResult from a non-2xx response.

    The message is taken from the body's `message`, `title` or `detail`
    field, in that order; anything else falls back to "HTTP <status>".
    """
    fallback = f"HTTP {status_code}"

    try:
        data = decode_body(content)
    except ValueError:
        text = content.decode("utf-8", errors="replace").strip()
        # Plain-text bodies are kept when short enough to be a message
        message = text if text and len(text) <= 500 else fallback
        return ErrorResult(status=status_code, message=message)

    if not isinstance(data, dict):
        return ErrorResult(status=status_code, message=fallback)

    title = _optional_str(data.get("title"))
    detail = _optional_str(data.get("detail"))
    message = _optional_str(data.get("message")) or title or detail or fallback

    return ErrorResult(
        status=status_code,
        message=message,
        errors=_flatten_errors(data.get("errors")),
        title=title,
        detail=detail,
        type=_optional_str(data.get("type")),
    )


def normalize_response(raw: RawResponse, response_type: ResponseType = None) -> Any:
    """
    Convert a raw response into the expected value or an ErrorResult.

    Args:
        raw: Response returned by the transport
        response_type: Converter applied to the decoded body; `bytes` returns
            the raw body and None returns the decoded JSON unchanged

    Returns:
        The converted success value, or an ErrorResult
    """
    if not is_success(raw.status_code):
        result = error_from_body(raw.status_code, raw.content)
        logger.warning(f"API error {result.status}: {result.message}")
        return result

    if response_type is bytes:
        return raw.content

    try:
        data = decode_body(raw.content)
    except ValueError as e:
        logger.warning(f"Could not decode {raw.status_code} response body: {e}")
        return ErrorResult(
            status=raw.status_code,
            message=f"Invalid JSON in response body: {e}",
        )

    if response_type is None or data is None:
        return data

    try:
        return response_type(data)
    except (TypeError, ValueError, KeyError, AttributeError) as e:
        logger.warning(f"Response body did not match the expected shape: {e}")
        return ErrorResult(
            status=raw.status_code,
            message=f"Unexpected response shape: {e}",
        )


def normalize_failure(error: TransportError) -> ErrorResult:
    """Convert a transport failure into an ErrorResult with no status."""
    message = str(error).strip()
    if not message and error.cause is not None:
        message = str(error.cause).strip() or type(error.cause).__name__
    if not message:
        message = "Request failed without a response"

    logger.warning(f"Transport failure: {message}")
    return ErrorResult(status=None, message=message)
