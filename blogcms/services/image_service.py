"""Post image attachment service: batch upload, rename and removal of stored images."""

import logging
from typing import List, Optional, Sequence, Tuple

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from blogcms.config import settings
from blogcms.models.post import PostImage
from blogcms.models.user import User
from blogcms.services.post_service import get_post
from blogcms.utils import validators
from blogcms.utils.helpers import remove_upload, store_upload
from blogcms.utils.image_utils import read_dimensions

logger = logging.getLogger(__name__)


def _validate_batch(files: Sequence[Tuple[str, bytes]], names: Sequence[str]) -> List[dict]:
    if not files:
        raise HTTPException(status_code=400, detail="No images were uploaded.")
    if names and len(names) != len(files):
        raise HTTPException(status_code=400, detail="Each image needs exactly one name.")

    prepared = []
    for index, (filename, content) in enumerate(files):
        if not validators.is_allowed_image(filename):
            allowed = ", ".join(settings.ALLOWED_IMAGE_EXTENSIONS)
            raise HTTPException(status_code=400, detail=f"{filename}: only image files ({allowed}) are allowed.")
        if not content:
            raise HTTPException(status_code=400, detail=f"{filename}: file is empty.")
        if len(content) > settings.MAX_IMAGE_SIZE:
            limit_mb = settings.MAX_IMAGE_SIZE // 1024 // 1024
            raise HTTPException(status_code=400, detail=f"{filename}: file exceeds {limit_mb} MB limit.")
        try:
            width, height = read_dimensions(content)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"{filename}: file is not a readable image.")

        raw_name = names[index] if names else validators.default_image_name(filename)
        try:
            name = validators.clean_image_name(raw_name)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"{filename}: {exc}")

        prepared.append({
            "name": name,
            "content": content,
            "ext": validators.image_extension(filename),
            "width": width,
            "height": height,
        })
    return prepared


def _remove_all(public_ids: List[str]):
    for public_id in public_ids:
        try:
            remove_upload(public_id)
        except OSError as exc:
            logger.warning("[images] failed to roll back stored file %s: %s", public_id, exc)


def attach_images(
    db: Session,
    post_id: int,
    files: Sequence[Tuple[str, bytes]],
    names: Optional[Sequence[str]],
    current_user: User,
) -> List[PostImage]:
    """Attach a batch of images to a post. Either every file is stored or none is."""
    post = get_post(db, post_id)
    prepared = _validate_batch(files, list(names or []))

    next_position = (
        db.query(func.max(PostImage.position)).filter(PostImage.post_id == post.post_id).scalar()
    )
    next_position = (next_position or 0) + 1

    stored: List[str] = []
    created: List[PostImage] = []
    try:
        for offset, item in enumerate(prepared):
            saved = store_upload(item["content"], subfolder=f"posts/{post.post_id}", ext=item["ext"])
            stored.append(saved["public_id"])
            image = PostImage(
                post_id=post.post_id,
                name=item["name"],
                url=saved["url"],
                public_id=saved["public_id"],
                width=item["width"],
                height=item["height"],
                position=next_position + offset,
            )
            db.add(image)
            created.append(image)
        db.commit()
    except Exception:
        db.rollback()
        _remove_all(stored)
        logger.exception("[images] batch upload failed for post_id=%s", post.post_id)
        raise

    for image in created:
        db.refresh(image)
    logger.info(
        "[images] attached %s image(s) to post_id=%s by user_id=%s",
        len(created),
        post.post_id,
        current_user.user_id,
    )
    return created


def get_image(db: Session, post_id: int, image_id: int) -> PostImage:
    get_post(db, post_id)
    image = (
        db.query(PostImage)
        .filter(PostImage.image_id == image_id, PostImage.post_id == post_id)
        .first()
    )
    if not image:
        raise HTTPException(status_code=404, detail="Image not found.")
    return image


def rename_image(db: Session, post_id: int, image_id: int, name: str) -> PostImage:
    image = get_image(db, post_id, image_id)
    if image.name != name:
        image.name = name
        db.commit()
        db.refresh(image)
    return image


def delete_image(db: Session, post_id: int, image_id: int, current_user: User):
    image = get_image(db, post_id, image_id)
    public_id = image.public_id
    db.delete(image)
    db.commit()
    try:
        remove_upload(public_id)
    except OSError as exc:
        logger.warning("[images] failed to remove stored file %s: %s", public_id, exc)
    logger.info(
        "[images] removed image_id=%s from post_id=%s by user_id=%s",
        image_id,
        post_id,
        current_user.user_id,
    )
