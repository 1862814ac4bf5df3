"""Application-wide exception hierarchy.

Classes:
    UrlifyClientError:
        Base class for all application-specific errors.

    ValidationError:
        Raised for malformed user input (e.g., an invalid long URL).

    PersistenceCorruptionError:
        Raised when a persisted session payload cannot be parsed.

    GatewayError:
        Base class for failures reported by, or on the way to, the remote API.
        Carries the HTTP `status_code` and the `server_message` (when any).

    AuthorizationError:
        Raised when the remote API rejects the current credentials (HTTP 401).

    ResourceError:
        Raised for any other non-successful API response.

    TransportError:
        Raised when the remote API is unreachable.

    MalformedResponseError:
        Raised when the remote API responds with a payload that can't be decoded.

    ConfigurationError, MissingEnvironmentVariableError, BadConfigurationError:
        Raised when the client is misconfigured.

Example:
    >>> from urlifyclient.exceptions import ResourceError
    >>> raise ResourceError('DELETE /urls/abc123 failed (HTTP 404)', status_code=404, server_message='URL not found')
    Traceback (most recent call last):
        ...
    urlifyclient.exceptions.ResourceError: DELETE /urls/abc123 failed (HTTP 404)
"""


class UrlifyClientError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:urlify_client_error'


class ValidationError(UrlifyClientError):
    """Raised when user input is malformed."""

    error_code = 'client:validation_error'


class PersistenceCorruptionError(UrlifyClientError):
    """Raised when a persisted session payload is malformed."""

    error_code = 'client:persistence_corruption_error'


class GatewayError(UrlifyClientError):
    """Base exception for all remote API failures."""

    error_code = 'gateway:gateway_error'

    def __init__(self, message: str = '', status_code: int | None = None, server_message: str | None = None):
        super().__init__(message or server_message or '')
        self.status_code = status_code
        self.server_message = server_message


class AuthorizationError(GatewayError):
    """Raised when the remote API rejects the current credentials."""

    error_code = 'gateway:authorization_error'


class ResourceError(GatewayError):
    """Raised when the remote API fails a non-authorization request."""

    error_code = 'gateway:resource_error'


class TransportError(ResourceError):
    """Raised when the remote API can't be reached."""

    error_code = 'gateway:transport_error'


class MalformedResponseError(TransportError):
    """Raised when a response is malformed."""

    error_code = 'gateway:malformed_response_error'


class ConfigurationError(UrlifyClientError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the client is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
