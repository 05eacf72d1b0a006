"""Role constants and helpers for permission checks."""

from blogcms.models.user import User


ADMIN = "admin"


def is_admin(user: User) -> bool:
    return user.role == ADMIN and bool(user.is_active)
