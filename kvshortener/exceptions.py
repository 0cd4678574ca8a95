"""Application-specific exceptions.

Every exception raised on purpose by kvshortener derives from ShortenerError.
Each class pins the HTTP status and the stable error code that the transport
layer puts in the JSON error body:

    {"message": "Not Found", "status": 404, "error_code": -2}

Example:
    >>> from kvshortener.exceptions import NotFoundError
    >>> NotFoundError().to_dict()
    {'message': 'Not Found', 'status': 404, 'error_code': -2}
"""

from typing import Any

from kvshortener.constants import ErrorCode


class ShortenerError(Exception):
    """Base exception for all application-specific errors."""

    status = 500
    error_code = ErrorCode.SERVER_ERROR
    default_message = 'Internal Server Error'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            'message': self.message,
            'status': self.status,
            'error_code': int(self.error_code),
        }


class ServerError(ShortenerError):
    """Raised on unexpected internal failures (e.g. an unparseable request URL)."""


class AllocationError(ServerError):
    """Raised when no free short identifier was found within the attempt cap."""

    default_message = 'Could not allocate a short identifier'


class NotFoundError(ShortenerError):
    """Raised when a short URL or asset does not exist."""

    status = 404
    error_code = ErrorCode.NOT_FOUND
    default_message = 'Not Found'


class MethodNotAllowedError(ShortenerError):
    """Raised when the creation endpoint is called with anything but POST."""

    status = 415
    error_code = ErrorCode.METHOD_NOT_ALLOWED
    default_message = 'Method Not Allowed'


class SerializationError(ShortenerError):
    """Raised when a value can't be encoded for the response or the data store."""

    error_code = ErrorCode.SERIALIZATION_ERROR
    default_message = 'Serialization Error'


class DeserializationError(ShortenerError):
    """Raised when a request body or stored value is malformed JSON."""

    status = 400
    error_code = ErrorCode.DESERIALIZATION_ERROR
    default_message = 'Malformed JSON'


class URLError(ShortenerError):
    """Raised when the destination URL is invalid."""

    status = 400
    error_code = ErrorCode.URL_ERROR
    default_message = 'target url syntax error'


class TTLError(ShortenerError):
    """Raised when a non-zero TTL is below the allowed minimum."""

    status = 400
    error_code = ErrorCode.TTL_ERROR
    default_message = 'The TTL must be greater than 60 seconds.'


class NeedAuthError(ShortenerError):
    """Raised when the requested TTL is only available to authenticated callers."""

    status = 401
    error_code = ErrorCode.NEED_AUTH
    default_message = 'Need Auth'


class ConfigurationError(ShortenerError):
    """Base exception for all configuration errors."""


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""
