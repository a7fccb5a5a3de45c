"""Exception hierarchy for jsonwebdb.

All exceptions carry an exit_code for CLI return value mapping.
Declined operations reported by the backend are NOT raised by the
Insert/AnySQL components; they are exposed through failed() and
get_error_message() instead.
"""

from jsonwebdb.core.exit_codes import ExitCode


class JsonWebDBError(Exception):
    """Base exception for all jsonwebdb errors."""

    exit_code: int = ExitCode.GENERAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NetworkError(JsonWebDBError):
    """Connection failures, unreachable host, HTTP error status."""

    exit_code: int = ExitCode.NETWORK_ERROR


class TimeoutError(NetworkError):
    """Request timed out in the transport."""

    exit_code: int = ExitCode.TIMEOUT


class ProtocolError(NetworkError):
    """Backend answered with something that is not a JSON object."""


class InputError(JsonWebDBError):
    """File not found, invalid parameters."""

    exit_code: int = ExitCode.INPUT_ERROR


class ConfigError(JsonWebDBError):
    """Malformed config, missing profile, missing source or session."""

    exit_code: int = ExitCode.CONFIG_ERROR


class BackendError(JsonWebDBError):
    """Backend reported success=false where the caller cannot continue."""

    exit_code: int = ExitCode.BACKEND_ERROR
