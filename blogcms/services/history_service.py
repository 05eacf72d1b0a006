"""Append-only post revision log: recording and lookup of full-state snapshots."""

import json
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from blogcms.models.post import Post
from blogcms.models.post_history import PostHistory
from blogcms.models.user import User

CHANGE_CREATED = "created"
CHANGE_UPDATED = "updated"


def snapshot_of(post: Post) -> Dict[str, Any]:
    return {
        "title": post.title,
        "description": post.description or "",
        "content": post.content or "",
        "status": post.status,
        "images": [
            {
                "image_id": image.image_id,
                "name": image.name,
                "url": image.url,
                "public_id": image.public_id,
                "width": image.width,
                "height": image.height,
            }
            for image in post.images
        ],
    }


def record(db: Session, *, post: Post, changed_by: int, change_type: str) -> PostHistory:
    """Stage one history row for ``post`` in the caller's transaction.

    The caller commits, so the post change and its entry land together.
    """
    current_max = (
        db.query(func.max(PostHistory.version_no))
        .filter(PostHistory.post_id == post.post_id)
        .scalar()
    )
    row = PostHistory(
        post_id=post.post_id,
        version_no=(current_max or 0) + 1,
        change_type=change_type,
        snapshot=json.dumps(snapshot_of(post), ensure_ascii=False),
        changed_by=changed_by,
    )
    db.add(row)
    db.flush()
    return row


def list_history(db: Session, *, post_id: int, newest_first: bool = False) -> List[tuple]:
    order = PostHistory.version_no.desc() if newest_first else PostHistory.version_no.asc()
    return (
        db.query(PostHistory, User)
        .join(User, User.user_id == PostHistory.changed_by)
        .filter(PostHistory.post_id == post_id)
        .order_by(order)
        .all()
    )


def parse_snapshot(row: PostHistory) -> Dict[str, Any]:
    try:
        return json.loads(row.snapshot or "{}")
    except json.JSONDecodeError:
        return {}


def to_response(row: PostHistory, user: User) -> Dict[str, Any]:
    snapshot = parse_snapshot(row)
    return {
        "history_id": row.history_id,
        "post_id": row.post_id,
        "version_no": row.version_no,
        "change_type": row.change_type,
        "title": snapshot.get("title", ""),
        "description": snapshot.get("description", ""),
        "content": snapshot.get("content", ""),
        "status": snapshot.get("status"),
        "images": snapshot.get("images", []),
        "changed_by": {"user_id": user.user_id, "username": user.username},
        "changed_at": row.changed_at,
    }
