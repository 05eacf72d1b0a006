"""Posts API router: post CRUD, image attachments and revision history."""

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.orm import Session
from typing import List, Literal, Optional

from blogcms.database import get_db
from blogcms.middleware.auth_middleware import get_current_user, require_roles
from blogcms.models.user import User
from blogcms.schemas.history import PostHistoryOut
from blogcms.schemas.post import (
    ImageRenameRequest,
    PostCreate,
    PostImageOut,
    PostOut,
    PostPage,
    PostUpdate,
    StatusFilter,
)
from blogcms.services import history_service, image_service, post_service
from blogcms.utils.permissions import ADMIN

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("", response_model=PostPage)
def list_posts(
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    status_filter: Optional[StatusFilter] = Query(None, alias="status"),
    search: Optional[str] = Query(None, max_length=100),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
):
    return post_service.list_posts(db, page=page, page_size=page_size, status=status_filter, search_q=search)


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
def create_post(
    data: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return post_service.create_post(db, data, current_user)


@router.get("/{post_id}", response_model=PostOut)
def get_post(post_id: int, db: Session = Depends(get_db), _current_user: User = Depends(get_current_user)):
    return post_service.get_post(db, post_id)


@router.put("/{post_id}", response_model=PostOut)
def update_post(
    post_id: int,
    data: PostUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return post_service.update_post(db, post_id, data, current_user)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
):
    post_service.delete_post(db, post_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/images", response_model=List[PostImageOut], status_code=status.HTTP_201_CREATED)
async def upload_images(
    post_id: int,
    images: List[UploadFile] = File(...),
    image_names: Optional[List[str]] = Form(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    files = [(upload.filename or "", await upload.read()) for upload in images]
    return image_service.attach_images(db, post_id, files, image_names, current_user)


@router.put("/{post_id}/images/{image_id}", response_model=PostImageOut)
def rename_image(
    post_id: int,
    image_id: int,
    data: ImageRenameRequest,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
):
    return image_service.rename_image(db, post_id, image_id, data.name)


@router.delete("/{post_id}/images/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_image(
    post_id: int,
    image_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    image_service.delete_image(db, post_id, image_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{post_id}/history", response_model=List[PostHistoryOut])
def list_post_history(
    post_id: int,
    order: Literal["asc", "desc"] = "asc",
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
):
    rows = history_service.list_history(db, post_id=post_id, newest_first=order == "desc")
    return [history_service.to_response(row, user) for row, user in rows]
