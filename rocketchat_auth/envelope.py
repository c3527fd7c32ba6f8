"""
Response envelope parsing.

Turns a raw status code and body into exactly one of ``Success``,
``ApiErrorEnvelope`` or ``DecodeFailure``. Decode problems are returned as
data, never raised.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class Success:
    """A 200 response whose body decoded to a JSON object."""

    payload: Dict[str, Any]


@dataclass(frozen=True)
class ApiErrorEnvelope:
    """
    A non-200 response.

    ``error_message`` is None when the body was empty or could not be read
    as an error object; the classifier treats that as a generic failure.
    """

    status: int
    error_type: Optional[str] = None
    error_message: Optional[str] = None


@dataclass(frozen=True)
class DecodeFailure:
    """A 200 response whose body is not a JSON object."""

    cause: Exception


ResponseEnvelope = Union[Success, ApiErrorEnvelope, DecodeFailure]


def _decode_object(body: Union[bytes, str, None]) -> Dict[str, Any]:
    if body is None:
        body = b""
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _parse_error_body(status: int, body: Union[bytes, str, None]) -> ApiErrorEnvelope:
    if not body or not body.strip():
        return ApiErrorEnvelope(status)

    try:
        data = _decode_object(body)
    except (ValueError, RecursionError):
        return ApiErrorEnvelope(status)

    message = data.get("error", data.get("message"))
    error_type = data.get("errorType")
    return ApiErrorEnvelope(
        status=status,
        error_type=str(error_type) if error_type is not None else None,
        error_message=str(message) if message is not None else None,
    )


def parse_envelope(status: int, body: Union[bytes, str, None]) -> ResponseEnvelope:
    """
    Parse a raw response.

    Args:
        status: HTTP status code
        body: Raw response body; may be empty

    Returns:
        Success for a 200 with a JSON object body, DecodeFailure for a 200
        with anything else, ApiErrorEnvelope for every other status.
    """
    if status != 200:
        return _parse_error_body(status, body)

    # UnicodeDecodeError and JSONDecodeError are both ValueErrors;
    # deeply nested bodies exhaust the decoder's recursion limit
    try:
        return Success(_decode_object(body))
    except (ValueError, RecursionError) as e:
        return DecodeFailure(e)
