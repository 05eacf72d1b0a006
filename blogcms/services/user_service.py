"""User account service: admin-managed creation, updates and deactivation."""

from fastapi import HTTPException
from sqlalchemy.orm import Session

from blogcms.models.user import User
from blogcms.schemas.user import UserCreate, UserUpdate
from blogcms.utils.permissions import ADMIN, is_admin


def _ensure_unique(db: Session, username: str | None, email: str | None, exclude_user_id: int | None = None):
    if username is not None:
        q = db.query(User).filter(User.username == username)
        if exclude_user_id is not None:
            q = q.filter(User.user_id != exclude_user_id)
        if q.first():
            raise HTTPException(status_code=409, detail="Username is already in use.")
    if email is not None:
        q = db.query(User).filter(User.email == email)
        if exclude_user_id is not None:
            q = q.filter(User.user_id != exclude_user_id)
        if q.first():
            raise HTTPException(status_code=409, detail="Email is already in use.")


def _ensure_not_last_admin_change(db: Session, user: User, next_role: str, next_active: bool):
    is_admin_leaving = is_admin(user) and (next_role != ADMIN or next_active is False)
    if is_admin_leaving:
        admin_count = db.query(User).filter(User.role == ADMIN, User.is_active == True).count()  # noqa: E712
        if admin_count <= 1:
            raise HTTPException(status_code=400, detail="The last administrator cannot be changed.")


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found.")
    return user


def list_users(db: Session, include_inactive: bool = False):
    q = db.query(User)
    if not include_inactive:
        q = q.filter(User.is_active == True)  # noqa: E712
    return q.order_by(User.user_id).all()


def create_user(db: Session, data: UserCreate) -> User:
    username = data.username.strip()
    email = data.email.strip().lower()
    if not username or not email:
        raise HTTPException(status_code=400, detail="Username and email are required.")
    _ensure_unique(db, username, email)

    user = User(username=username, email=email, role=data.role, is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user_id: int, data: UserUpdate, current_user: User) -> User:
    user = get_user(db, user_id)
    payload = data.model_dump(exclude_unset=True)

    if "username" in payload:
        payload["username"] = (payload["username"] or "").strip()
        if not payload["username"]:
            raise HTTPException(status_code=400, detail="Username must not be empty.")
    if "email" in payload:
        payload["email"] = (payload["email"] or "").strip().lower()
        if not payload["email"]:
            raise HTTPException(status_code=400, detail="Email must not be empty.")
    _ensure_unique(db, payload.get("username"), payload.get("email"), exclude_user_id=user.user_id)

    next_role = payload.get("role", user.role)
    next_active = payload.get("is_active", user.is_active)
    if user.user_id == current_user.user_id and (next_role != ADMIN or next_active is False):
        raise HTTPException(status_code=400, detail="You cannot change your own role or deactivate yourself.")
    _ensure_not_last_admin_change(db, user, next_role, next_active)

    for key, value in payload.items():
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int, current_user: User):
    # Accounts are deactivated, not removed: posts and history keep referencing them.
    if user_id == current_user.user_id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account.")

    user = get_user(db, user_id)
    if not user.is_active:
        raise HTTPException(status_code=404, detail="User not found.")
    _ensure_not_last_admin_change(db, user, user.role, False)

    user.is_active = False
    db.commit()


def restore_user(db: Session, user_id: int) -> User:
    user = get_user(db, user_id)
    if user.is_active:
        raise HTTPException(status_code=409, detail="User is already active.")

    user.is_active = True
    db.commit()
    db.refresh(user)
    return user
