"""
Error taxonomy for request and response verification.

Every verification failure maps to exactly one ErrorType. Each check raises the
matching AuthenticationError subclass, and the verifier turns it into a typed
result for the caller.
"""

from enum import Enum


class ErrorType(Enum):
    """Distinguishable verification failures."""

    INVALID_AUTH_HEADER = "invalid_auth_header"
    MISSING_REQUIRED_HEADER = "missing_required_header"
    INVALID_REQUIRED_HEADER = "invalid_required_header"
    TIMESTAMP_RANGE_ERROR = "timestamp_range_error"
    OUTDATED_KEYPAIR = "outdated_keypair"
    SIGNATURE_MISMATCH = "signature_mismatch"


class AuthenticationError(ValueError):
    """Base class for verification failures."""

    error_type: ErrorType

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAuthHeaderError(AuthenticationError):
    error_type = ErrorType.INVALID_AUTH_HEADER


class MissingRequiredHeaderError(AuthenticationError):
    error_type = ErrorType.MISSING_REQUIRED_HEADER


class InvalidRequiredHeaderError(AuthenticationError):
    error_type = ErrorType.INVALID_REQUIRED_HEADER


class TimestampRangeError(AuthenticationError):
    error_type = ErrorType.TIMESTAMP_RANGE_ERROR


class OutdatedKeypairError(AuthenticationError):
    error_type = ErrorType.OUTDATED_KEYPAIR


class SignatureMismatchError(AuthenticationError):
    error_type = ErrorType.SIGNATURE_MISMATCH


class SigningError(ValueError):
    """Raised when an outgoing message cannot be signed."""
