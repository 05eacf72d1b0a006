"""Post domain service: lifecycle rules, listing, and history capture on every mutation."""

import logging
import math
from typing import List

from fastapi import HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from blogcms.config import settings
from blogcms.models.post import Post
from blogcms.models.user import User
from blogcms.schemas.post import PostCreate, PostUpdate
from blogcms.services import history_service
from blogcms.utils.helpers import remove_upload

logger = logging.getLogger(__name__)


def get_post(db: Session, post_id: int) -> Post:
    post = db.query(Post).filter(Post.post_id == post_id).first()
    if not post:
        raise HTTPException(status_code=404, detail="Post not found.")
    return post


def list_posts(
    db: Session,
    page: int = 1,
    page_size: int | None = None,
    status: str | None = None,
    search_q: str | None = None,
) -> dict:
    page = max(1, int(page))
    page_size = int(page_size or settings.DEFAULT_PAGE_SIZE)
    page_size = max(1, min(page_size, settings.MAX_PAGE_SIZE))

    query = db.query(Post)
    if status and status != "all":
        query = query.filter(Post.status == status)
    if search_q and search_q.strip():
        keyword = f"%{search_q.strip()}%"
        query = query.filter(
            or_(
                Post.title.ilike(keyword),
                Post.description.ilike(keyword),
            )
        )

    total = query.count()
    items: List[Post] = (
        query.order_by(Post.created_at.desc(), Post.post_id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": math.ceil(total / page_size),
    }


def create_post(db: Session, data: PostCreate, current_user: User) -> Post:
    post = Post(
        author_id=current_user.user_id,
        title=data.title,
        description=data.description,
        content=data.content,
        status="draft",
    )
    db.add(post)
    db.flush()
    history_service.record(
        db,
        post=post,
        changed_by=current_user.user_id,
        change_type=history_service.CHANGE_CREATED,
    )
    db.commit()
    db.refresh(post)
    logger.info("[posts] created post_id=%s by user_id=%s", post.post_id, current_user.user_id)
    return post


def update_post(db: Session, post_id: int, data: PostUpdate, current_user: User) -> Post:
    post = get_post(db, post_id)
    payload = data.model_dump(exclude_unset=True)
    for key, value in payload.items():
        setattr(post, key, value)
    db.flush()
    # Snapshot after applying the patch so unsent fields carry their current values.
    history_service.record(
        db,
        post=post,
        changed_by=current_user.user_id,
        change_type=history_service.CHANGE_UPDATED,
    )
    db.commit()
    db.refresh(post)
    logger.info(
        "[posts] updated post_id=%s fields=%s by user_id=%s",
        post.post_id,
        sorted(payload),
        current_user.user_id,
    )
    return post


def delete_post(db: Session, post_id: int, current_user: User):
    post = get_post(db, post_id)
    stored = [image.public_id for image in post.images]
    db.delete(post)
    db.commit()
    for public_id in stored:
        try:
            remove_upload(public_id)
        except OSError as exc:
            logger.warning("[posts] failed to remove stored image %s: %s", public_id, exc)
    logger.info("[posts] deleted post_id=%s by user_id=%s", post_id, current_user.user_id)
