"""HTTP data-access layer for the blog backend.

Every request carries the bearer token from the injected credential provider.
Non-2xx responses are translated into :mod:`blogcms.client.errors` kinds; a
401 invalidates the credential before ``SessionExpiredError`` is raised.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

import httpx

from blogcms.client.credentials import CredentialProvider
from blogcms.client.errors import (
    AuthorizationError,
    ClientError,
    NetworkError,
    NotFoundError,
    SessionExpiredError,
    UploadError,
    ValidationError,
)
from blogcms.config import settings
from blogcms.schemas.history import PostHistoryOut
from blogcms.schemas.post import PostImageOut, PostOut, PostPage

logger = logging.getLogger(__name__)

UploadPart = Tuple[str, bytes, str]  # (filename, content, content_type)
T = TypeVar("T")


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, list):
        # pydantic validation errors
        return "; ".join(str(item.get("msg", item) if isinstance(item, dict) else item) for item in detail if item)
    return str(detail or body)


def _list_of(model):
    def parse(body):
        if not isinstance(body, list):
            raise ValueError("expected a JSON array")
        return [model.model_validate(item) for item in body]
    return parse


class BlogApiClient:
    def __init__(
        self,
        credentials: CredentialProvider,
        http: Optional[httpx.Client] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.credentials = credentials
        self._owns_http = http is None
        self._http = http or httpx.Client(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout or settings.API_TIMEOUT_SECONDS,
        )

    def close(self):
        if self._owns_http:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _headers(self) -> Dict[str, str]:
        token = self.credentials.get_token()
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _error_for(self, response: httpx.Response, upload: bool = False) -> ClientError:
        code = response.status_code
        message = _detail(response)
        if code == 401:
            self.credentials.invalidate()
            return SessionExpiredError(message, status_code=code)
        if code == 403:
            return AuthorizationError(message, status_code=code)
        if code == 404:
            return NotFoundError(message, status_code=code)
        if upload:
            return UploadError(message, status_code=code)
        if code in (400, 409, 422):
            return ValidationError(message, status_code=code)
        return NetworkError(message, status_code=code)

    def request(self, method: str, path: str, upload: bool = False, **kwargs: Any) -> httpx.Response:
        try:
            response = self._http.request(method, path, headers=self._headers(), **kwargs)
        except httpx.TransportError as exc:
            logger.warning("[client] %s %s failed: %s", method, path, exc)
            if upload:
                raise UploadError(f"Upload failed: {exc}") from exc
            raise NetworkError(f"Request failed: {exc}") from exc
        if response.is_success:
            return response
        error = self._error_for(response, upload=upload)
        logger.info("[client] %s %s -> %s %s", method, path, response.status_code, error.message)
        raise error

    @staticmethod
    def _decode(response: httpx.Response, parse: Callable[[Any], T]) -> T:
        """Parse a 2xx body; anything unreadable is reported as a network failure."""
        try:
            return parse(response.json())
        except ValueError as exc:
            # covers JSONDecodeError and pydantic validation errors
            logger.warning("[client] unexpected response body from %s: %s", response.request.url, exc)
            raise NetworkError(
                f"Unexpected response from server (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from exc

    # Posts

    def list_posts(
        self,
        page: int = 1,
        page_size: Optional[int] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> PostPage:
        params: Dict[str, Any] = {"page": page}
        if page_size is not None:
            params["page_size"] = page_size
        if status and status != "all":
            params["status"] = status
        if search:
            params["search"] = search
        response = self.request("GET", "/api/posts", params=params)
        return self._decode(response, PostPage.model_validate)

    def get_post(self, post_id: int) -> PostOut:
        response = self.request("GET", f"/api/posts/{post_id}")
        return self._decode(response, PostOut.model_validate)

    def create_post(self, payload: Dict[str, Any]) -> PostOut:
        response = self.request("POST", "/api/posts", json=payload)
        return self._decode(response, PostOut.model_validate)

    def update_post(self, post_id: int, payload: Dict[str, Any]) -> PostOut:
        response = self.request("PUT", f"/api/posts/{post_id}", json=payload)
        return self._decode(response, PostOut.model_validate)

    def delete_post(self, post_id: int) -> None:
        self.request("DELETE", f"/api/posts/{post_id}")

    # Images

    def upload_images(self, post_id: int, parts: Sequence[UploadPart], names: Sequence[str]) -> List[PostImageOut]:
        files = [("images", part) for part in parts]
        response = self.request(
            "POST",
            f"/api/posts/{post_id}/images",
            upload=True,
            files=files,
            data={"image_names": list(names)},
        )
        return self._decode(response, _list_of(PostImageOut))

    def rename_image(self, post_id: int, image_id: int, name: str) -> PostImageOut:
        response = self.request("PUT", f"/api/posts/{post_id}/images/{image_id}", json={"name": name})
        return self._decode(response, PostImageOut.model_validate)

    def delete_image(self, post_id: int, image_id: int) -> None:
        self.request("DELETE", f"/api/posts/{post_id}/images/{image_id}")

    # History

    def list_history(self, post_id: int, newest_first: bool = False) -> List[PostHistoryOut]:
        params = {"order": "desc" if newest_first else "asc"}
        response = self.request("GET", f"/api/posts/{post_id}/history", params=params)
        return self._decode(response, _list_of(PostHistoryOut))
