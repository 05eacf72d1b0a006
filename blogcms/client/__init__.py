"""Content client: post lifecycle, image attachments, history and listing over the blog API."""

from blogcms.client.actions import ActionResult, Notification, run_action
from blogcms.client.aggregate import PostAggregate
from blogcms.client.api import BlogApiClient
from blogcms.client.attachments import ImageAttachmentManager
from blogcms.client.credentials import CredentialProvider, TokenCredentials
from blogcms.client.errors import (
    ActionInProgressError,
    AuthorizationError,
    ClientError,
    NetworkError,
    NotFoundError,
    SessionExpiredError,
    UploadError,
    ValidationError,
)
from blogcms.client.history import HistoryRecorder
from blogcms.client.query import PostCollectionQuery
from blogcms.client.types import ImageFile, PendingAttachment, PostPatch, StageRejection

__all__ = [
    "ActionInProgressError",
    "ActionResult",
    "AuthorizationError",
    "BlogApiClient",
    "ClientError",
    "CredentialProvider",
    "HistoryRecorder",
    "ImageAttachmentManager",
    "ImageFile",
    "NetworkError",
    "Notification",
    "NotFoundError",
    "PendingAttachment",
    "PostAggregate",
    "PostCollectionQuery",
    "PostPatch",
    "SessionExpiredError",
    "StageRejection",
    "TokenCredentials",
    "UploadError",
    "ValidationError",
    "run_action",
]
