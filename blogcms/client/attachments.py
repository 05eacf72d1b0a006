"""Image attachment manager: stage local images, then commit them in one batch."""

import logging
import uuid
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional

from blogcms.client.api import BlogApiClient
from blogcms.client.errors import ValidationError
from blogcms.client.types import ImageFile, PendingAttachment, StageRejection
from blogcms.config import settings
from blogcms.schemas.post import PostImageOut
from blogcms.utils import validators

if TYPE_CHECKING:
    from blogcms.client.aggregate import PostAggregate

logger = logging.getLogger(__name__)


def _rejection_reason(file: ImageFile) -> Optional[str]:
    if not validators.is_allowed_image(file.filename):
        allowed = ", ".join(settings.ALLOWED_IMAGE_EXTENSIONS)
        return f"Unsupported file type (allowed: {allowed})"
    if not validators.is_allowed_image_type(file.media_type):
        return f"Unsupported media type {file.media_type}"
    if file.size == 0:
        return "File is empty"
    if file.size > settings.MAX_IMAGE_SIZE:
        limit_mb = settings.MAX_IMAGE_SIZE // (1024 * 1024)
        return f"File exceeds the {limit_mb}MB limit"
    return None


class ImageAttachmentManager:
    def __init__(self, api: BlogApiClient, aggregate: "PostAggregate"):
        self.api = api
        self.aggregate = aggregate
        self.rejections: List[StageRejection] = []
        self._staged: List[PendingAttachment] = []
        self._previews: Dict[str, ImageFile] = {}

    @property
    def pending(self) -> List[PendingAttachment]:
        return list(self._staged)

    def preview(self, preview_ref: str) -> Optional[ImageFile]:
        return self._previews.get(preview_ref)

    def _find(self, pending_id: str) -> PendingAttachment:
        for entry in self._staged:
            if entry.pending_id == pending_id:
                return entry
        raise ValidationError(f"No staged image with id {pending_id}")

    def stage(self, files: Iterable[ImageFile]) -> List[PendingAttachment]:
        """Stage acceptable files. Rejected files are listed on ``rejections``."""
        accepted: List[PendingAttachment] = []
        self.rejections = []
        for file in files:
            reason = _rejection_reason(file)
            if reason:
                logger.info("[client] rejected %s: %s", file.filename, reason)
                self.rejections.append(StageRejection(filename=file.filename, reason=reason))
                continue
            preview_ref = f"preview:{uuid.uuid4().hex}"
            self._previews[preview_ref] = file
            entry = PendingAttachment(
                pending_id=uuid.uuid4().hex,
                file=file,
                name=validators.default_image_name(file.filename),
                preview_ref=preview_ref,
            )
            accepted.append(entry)
        self._staged.extend(accepted)
        return accepted

    def rename(self, pending_id: str, name: str) -> PendingAttachment:
        try:
            cleaned = validators.clean_image_name(name)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        entry = self._find(pending_id)
        entry.name = cleaned
        return entry

    def unstage(self, pending_id: str):
        entry = self._find(pending_id)
        self._staged.remove(entry)
        self._previews.pop(entry.preview_ref, None)

    def clear(self):
        self._staged.clear()
        self._previews.clear()
        self.rejections = []

    def commit(self, post_id: int, staged: Optional[List[PendingAttachment]] = None) -> List[PostImageOut]:
        """Upload staged images as one batch.

        On failure the staged entries stay in place so the batch can be retried.
        """
        batch = list(self._staged if staged is None else staged)
        if not batch:
            return []
        parts = [(entry.file.filename, entry.file.content, entry.file.media_type) for entry in batch]
        names = [entry.name for entry in batch]
        with self.aggregate.mutation("upload") as generation:
            images = self.api.upload_images(post_id, parts, names)
            committed = {entry.pending_id for entry in batch}
            for entry in batch:
                self._previews.pop(entry.preview_ref, None)
            self._staged = [entry for entry in self._staged if entry.pending_id not in committed]
            self.aggregate._append_images(generation, post_id, images)
        logger.info("[client] committed %s image(s) to post_id=%s", len(images), post_id)
        return images

    def rename_persisted(self, post_id: int, image_id: int, name: str) -> PostImageOut:
        try:
            cleaned = validators.clean_image_name(name)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        with self.aggregate.mutation("rename image") as generation:
            image = self.api.rename_image(post_id, image_id, cleaned)
            self.aggregate._replace_image(generation, post_id, image)
        return image

    def remove_persisted(
        self,
        post_id: int,
        image_id: int,
        confirm: Optional[Callable[[int], bool]] = None,
    ) -> bool:
        """Delete a persisted image. Returns False when ``confirm`` declines."""
        if confirm is not None and not confirm(image_id):
            return False
        with self.aggregate.mutation("remove image") as generation:
            self.api.delete_image(post_id, image_id)
            self.aggregate._drop_image(generation, post_id, image_id)
        logger.info("[client] removed image_id=%s from post_id=%s", image_id, post_id)
        return True
