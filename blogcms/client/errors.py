"""Error kinds raised by the content client."""

from typing import Optional


class ClientError(Exception):
    """Base class for every failure surfaced by the content client."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(ClientError):
    """Input rejected locally (never sent) or by the backend's validation."""
    pass


class NotFoundError(ClientError):
    pass


class AuthorizationError(ClientError):
    pass


class SessionExpiredError(AuthorizationError):
    """The backend rejected the credential; it has already been invalidated."""
    pass


class UploadError(ClientError):
    pass


class NetworkError(ClientError):
    pass


class ActionInProgressError(ClientError):
    """A mutating action on the same post is still in flight."""
    pass
