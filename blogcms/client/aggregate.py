"""Post aggregate: the client-side lifecycle of one post and its cached state."""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from blogcms.client.api import BlogApiClient
from blogcms.client.attachments import ImageAttachmentManager
from blogcms.client.errors import ActionInProgressError, ValidationError
from blogcms.client.types import PostPatch
from blogcms.schemas.post import PostImageOut, PostOut
from blogcms.utils import validators

logger = logging.getLogger(__name__)

_FIELD_RULES = {
    "title": validators.clean_title,
    "description": validators.clean_description,
    "content": validators.clean_content,
}


def _validated(fields: dict) -> dict:
    cleaned = {}
    for key, value in fields.items():
        if key == "status":
            if value not in validators.POST_STATUSES:
                raise ValidationError(f"Status must be one of: {', '.join(validators.POST_STATUSES)}")
            cleaned[key] = value
            continue
        try:
            cleaned[key] = _FIELD_RULES[key](value)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
    return cleaned


class PostAggregate:
    def __init__(self, api: BlogApiClient):
        self.api = api
        self.post: Optional[PostOut] = None
        self.images = ImageAttachmentManager(api, self)
        self._busy = threading.Lock()
        self._action: Optional[str] = None
        self._generation = 0

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    @contextmanager
    def mutation(self, name: str) -> Iterator[int]:
        """Serialize mutating actions; yields the generation the action started in."""
        if not self._busy.acquire(blocking=False):
            raise ActionInProgressError(f"'{self._action}' is still in progress")
        self._action = name
        try:
            yield self._generation
        finally:
            self._action = None
            self._busy.release()

    def abandon(self):
        """Drop the current view. Responses still in flight are no longer applied."""
        self._generation += 1
        self.post = None
        self.images.clear()

    def _apply(self, generation: int, post: Optional[PostOut]):
        if generation != self._generation:
            logger.debug("[client] discarding stale result for post_id=%s", post.post_id if post else None)
            return
        self.post = post

    def create(self, title: str, description: str = "", content: str = "") -> PostOut:
        payload = _validated({"title": title, "description": description, "content": content})
        with self.mutation("create") as generation:
            post = self.api.create_post(payload)
            self._apply(generation, post)
        logger.info("[client] created post_id=%s", post.post_id)
        return post

    def load(self, post_id: int) -> PostOut:
        generation = self._generation
        post = self.api.get_post(post_id)
        self._apply(generation, post)
        return post

    def update(self, post_id: int, patch: Optional[PostPatch] = None, **fields: Any) -> PostOut:
        if patch is None:
            try:
                patch = PostPatch(**fields)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
        elif fields:
            raise TypeError("Pass either a PostPatch or keyword fields, not both")
        payload = _validated(patch.fields())
        if not payload:
            raise ValidationError("Nothing to update")
        with self.mutation("update") as generation:
            post = self.api.update_post(post_id, payload)
            self._apply(generation, post)
        return post

    def set_status(self, post_id: int, status: str) -> PostOut:
        return self.update(post_id, PostPatch(status=status))

    def delete(self, post_id: int):
        with self.mutation("delete") as generation:
            self.api.delete_post(post_id)
            if self.post is not None and self.post.post_id == post_id:
                self._apply(generation, None)
                self.images.clear()
        logger.info("[client] deleted post_id=%s", post_id)

    # Image list maintenance, called by the attachment manager.

    def _current(self, generation: int, post_id: int) -> bool:
        return (
            generation == self._generation
            and self.post is not None
            and self.post.post_id == post_id
        )

    def _append_images(self, generation: int, post_id: int, images: List[PostImageOut]):
        if self._current(generation, post_id):
            self.post = self.post.model_copy(update={"images": [*self.post.images, *images]})

    def _replace_image(self, generation: int, post_id: int, image: PostImageOut):
        if self._current(generation, post_id):
            self.post = self.post.model_copy(
                update={"images": [image if i.image_id == image.image_id else i for i in self.post.images]}
            )

    def _drop_image(self, generation: int, post_id: int, image_id: int):
        if self._current(generation, post_id):
            self.post = self.post.model_copy(
                update={"images": [i for i in self.post.images if i.image_id != image_id]}
            )
