"""
Tests for response envelope parsing and error classification.

Property-based checks cover the ordering rules: 401 always wins, a bad
success body is always an invalid response, and error bodies compose
"<message> [<errorType or status>]".
"""

import json
import pytest
from hypothesis import given, settings, strategies as st

from rocketchat_auth import (
    ApiErrorEnvelope,
    DecodeFailure,
    Success,
    classify,
    parse_envelope,
)
from rocketchat_auth.errors import (
    ErrorKind,
    RocketChatError,
    INVALID_RESPONSE_MESSAGE,
    is_auth_error,
    is_rocketchat_error,
)


non_200 = st.integers(min_value=100, max_value=599).filter(lambda s: s != 200)
non_200_non_401 = non_200.filter(lambda s: s != 401)
bodies = st.one_of(st.none(), st.binary(max_size=200), st.text(max_size=200))


# =============================================================================
# Envelope Parser Tests
# =============================================================================

class TestParseEnvelope:
    """Tests for parse_envelope()."""

    def test_success(self):
        envelope = parse_envelope(200, b'{"userId": "u", "authToken": "t"}')
        assert envelope == Success({"userId": "u", "authToken": "t"})

    def test_success_from_str(self):
        assert isinstance(parse_envelope(200, '{"id": "u"}'), Success)

    @pytest.mark.parametrize("body", [b"NOT A JSON", b"", None, b"[1, 2]", b'"text"', b"\xff\xfe"])
    def test_success_status_with_bad_body(self, body):
        envelope = parse_envelope(200, body)
        assert isinstance(envelope, DecodeFailure)
        assert isinstance(envelope.cause, ValueError)

    def test_malformed_json_cause(self):
        envelope = parse_envelope(200, b"NOT A JSON")
        assert isinstance(envelope.cause, json.JSONDecodeError)

    def test_error_body(self):
        envelope = parse_envelope(403, b'{"error": "Email already exists.", "errorType": "403"}')
        assert envelope == ApiErrorEnvelope(403, "403", "Email already exists.")

    def test_error_body_message_fallback(self):
        envelope = parse_envelope(400, b'{"status": "error", "message": "Missing field"}')
        assert envelope == ApiErrorEnvelope(400, None, "Missing field")

    def test_numeric_error_type_is_stringified(self):
        envelope = parse_envelope(403, b'{"error": "Forbidden", "errorType": 403}')
        assert envelope.error_type == "403"

    @pytest.mark.parametrize("body", [None, b"", b"   ", b"<html>oops</html>", b"[]"])
    def test_error_status_without_usable_body(self, body):
        assert parse_envelope(500, body) == ApiErrorEnvelope(500)

    def test_deeply_nested_success_body(self):
        """A body deep enough to exhaust the decoder is a decode failure."""
        envelope = parse_envelope(200, b"[" * 200000)
        assert isinstance(envelope, DecodeFailure)
        assert isinstance(envelope.cause, RecursionError)

    @pytest.mark.parametrize("status", [401, 500])
    def test_deeply_nested_error_body(self, status):
        assert parse_envelope(status, b"[" * 200000) == ApiErrorEnvelope(status)

    @given(status=st.integers(min_value=100, max_value=599), body=bodies)
    @settings(max_examples=200)
    def test_never_raises(self, status, body):
        """Property: exactly one envelope variant is returned for any input."""
        envelope = parse_envelope(status, body)
        if status == 200:
            assert isinstance(envelope, (Success, DecodeFailure))
        else:
            assert isinstance(envelope, ApiErrorEnvelope)
            assert envelope.status == status


# =============================================================================
# Classifier Tests
# =============================================================================

class TestClassify:
    """Tests for classify()."""

    @given(body=bodies)
    @settings(max_examples=100)
    def test_401_is_always_auth(self, body):
        """Property: 401 is an auth error whatever the body."""
        error = classify(401, parse_envelope(401, body))
        assert error.kind is ErrorKind.AUTH
        assert error.message == "Unauthorized"
        assert error.error_type is None
        assert error.cause is None

    def test_401_beats_error_body(self):
        error = classify(401, ApiErrorEnvelope(401, "error-x", "Bad"))
        assert is_auth_error(error)

    def test_decode_failure(self):
        cause = ValueError("boom")
        error = classify(200, DecodeFailure(cause))
        assert error.kind is ErrorKind.INVALID_RESPONSE
        assert error.message == INVALID_RESPONSE_MESSAGE
        assert error.cause is cause
        assert error.__cause__ is cause

    @given(
        status=non_200_non_401,
        message=st.text(max_size=80),
        error_type=st.text(min_size=1, max_size=40),
    )
    @settings(max_examples=100)
    def test_error_type_in_brackets(self, status, message, error_type):
        """Property: a server error type is appended and exposed."""
        error = classify(status, ApiErrorEnvelope(status, error_type, message))
        assert error.kind is ErrorKind.API
        assert error.message == f"{message} [{error_type}]"
        assert error.error_type == error_type
        assert error.status_code == status

    @given(status=non_200_non_401, message=st.text(max_size=80))
    @settings(max_examples=100)
    def test_status_in_brackets_without_error_type(self, status, message):
        error = classify(status, ApiErrorEnvelope(status, None, message))
        assert error.message == f"{message} [{status}]"
        assert error.error_type is None

    @given(status=non_200_non_401)
    def test_generic_failure(self, status):
        error = classify(status, ApiErrorEnvelope(status))
        assert error.kind is ErrorKind.API
        assert error.message == f"Request failed [{status}]"
        assert error.error_type is None

    def test_field_unavailable(self):
        envelope = parse_envelope(403, json.dumps({
            "error": "<strong>testuser</strong> is already in use :(",
            "errorType": "error-field-unavailable",
        }))
        error = classify(403, envelope)
        assert error.message == "<strong>testuser</strong> is already in use :( [error-field-unavailable]"
        assert error.error_type == "error-field-unavailable"


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Tests for RocketChatError."""

    def test_named_constructors(self):
        assert RocketChatError.auth().is_auth
        assert RocketChatError.invalid_response(ValueError()).is_invalid_response
        assert RocketChatError.api("nope").is_api

    def test_error_to_dict(self):
        error = RocketChatError.api("Email already exists. [403]", error_type="403", status_code=403)

        error_dict = error.to_dict()

        assert error_dict["kind"] == "api"
        assert error_dict["message"] == "Email already exists. [403]"
        assert error_dict["error_type"] == "403"
        assert error_dict["status_code"] == 403
        assert error_dict["cause"] is None
        assert error_dict["timestamp"].endswith("Z")

    def test_repr(self):
        assert repr(RocketChatError.auth()) == (
            "RocketChatError(kind='auth', message='Unauthorized', error_type=None)"
        )

    def test_is_rocketchat_error(self):
        assert is_rocketchat_error(RocketChatError.auth())
        assert not is_rocketchat_error(ValueError("x"))
        assert not is_auth_error(RocketChatError.api("x"))
