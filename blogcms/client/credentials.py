"""Credential providers injected into the API client."""

import logging
import threading
from typing import Callable, List, Optional, Protocol

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    def get_token(self) -> Optional[str]:
        ...

    def invalidate(self) -> None:
        ...


class TokenCredentials:
    """In-memory bearer token holder.

    ``invalidate()`` drops the token and notifies listeners registered with
    ``on_invalidated``; tearing the session down is up to those listeners.
    """

    def __init__(self, token: Optional[str] = None):
        self._token = token
        self._listeners: List[Callable[[], None]] = []
        self._lock = threading.Lock()

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        with self._lock:
            self._token = token

    def on_invalidated(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(callback)
        return callback

    def invalidate(self) -> None:
        with self._lock:
            if self._token is None:
                return
            self._token = None
        logger.info("[client] credential invalidated")
        for callback in list(self._listeners):
            callback()
