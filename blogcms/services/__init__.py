"""Service layer package initialization."""

from blogcms.services import (
    auth_service,
    history_service,
    post_service,
    image_service,
    user_service,
)
