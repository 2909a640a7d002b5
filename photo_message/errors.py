"""
Failure types raised along the send pipeline.

Every failure the handler reports is a PhotoMessageError; anything else
reaching the handler is treated as an unexpected fault and reported with
its traceback.
"""

from typing import Optional

METHOD_ENSURE_TWILIO_INITIALIZED = "ensureAuthTokenDecrypted"
METHOD_SEND_MESSAGE = "sendMessage"


class PhotoMessageError(Exception):
    """Base class for failures reported to the invocation harness."""


class ConfigurationError(PhotoMessageError, RuntimeError):
    """A required environment variable is missing."""


class ResolverError(PhotoMessageError):
    """A single ciphertext could not be decrypted."""

    def __init__(self, field: str, cause: object):
        self.field = field
        self.cause = cause
        super().__init__(f"Error decrypting '{field}': {cause}")


class InitializationError(PhotoMessageError):
    """Credential initialization aborted; no client was built."""

    def __init__(self, error: ResolverError):
        self.field = error.field
        self.cause = error.cause
        super().__init__(
            f"{METHOD_ENSURE_TWILIO_INITIALIZED} - Error decrypting '{error.field}': {error.cause}"
        )


class DispatchError(PhotoMessageError):
    """Twilio rejected the message or could not be reached."""

    def __init__(
        self,
        cause: object,
        status: Optional[int] = None,
        code: Optional[int] = None,
        more_info: Optional[str] = None,
    ):
        self.cause = cause
        self.status = status
        self.code = code
        self.more_info = more_info
        super().__init__(
            f"{METHOD_SEND_MESSAGE} - Error sending message to photographer via Twilio: {cause}"
        )


class HandlerFailure(Exception):
    """Raised by the Lambda entry point carrying the reported failure string."""
