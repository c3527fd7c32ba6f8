"""Maps a non-success envelope onto a RocketChatError."""

from .envelope import ApiErrorEnvelope, DecodeFailure, ResponseEnvelope
from .errors import RocketChatError


def classify(status: int, envelope: ResponseEnvelope) -> RocketChatError:
    """
    Classify a failed exchange. First matching rule wins:

    1. 401 is an auth error, whatever the body says.
    2. An undecodable success body is an invalid response.
    3. An error body with a message becomes "<message> [<errorType or status>]".
    4. Anything else is a generic API error.
    """
    if status == 401:
        return RocketChatError.auth()

    if isinstance(envelope, DecodeFailure):
        return RocketChatError.invalid_response(envelope.cause, status_code=status)

    if isinstance(envelope, ApiErrorEnvelope) and envelope.error_message is not None:
        tag = envelope.error_type if envelope.error_type is not None else str(status)
        return RocketChatError.api(
            f"{envelope.error_message} [{tag}]",
            error_type=envelope.error_type,
            status_code=status,
        )

    return RocketChatError.api(f"Request failed [{status}]", status_code=status)
