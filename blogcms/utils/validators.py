"""Field rules shared by the API schemas and the content client."""

from typing import Optional

from blogcms.config import settings

POST_STATUSES = ("draft", "published")

# extension -> media type, for extensions whose subtype differs
_MEDIA_SUBTYPES = {"jpg": "jpeg"}


def clean_title(value: Optional[str]) -> str:
    title = (value or "").strip()
    if not title:
        raise ValueError("Title must not be empty")
    if len(title) > settings.TITLE_MAX_LENGTH:
        raise ValueError(f"Title must be at most {settings.TITLE_MAX_LENGTH} characters")
    return title


def clean_text(value: Optional[str], field: str, required: bool = False) -> str:
    text = (value or "").strip()
    if required and not text:
        raise ValueError(f"{field.capitalize()} must not be empty")
    return text


def clean_description(value: Optional[str]) -> str:
    return clean_text(value, "description", required=settings.REQUIRE_DESCRIPTION)


def clean_content(value: Optional[str]) -> str:
    return clean_text(value, "content", required=settings.REQUIRE_CONTENT)


def clean_image_name(value: Optional[str]) -> str:
    name = (value or "").strip()
    if not name:
        raise ValueError("Image name must not be empty")
    if len(name) > 255:
        raise ValueError("Image name must be at most 255 characters")
    return name


def image_extension(filename: Optional[str]) -> str:
    name = filename or ""
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""


def is_allowed_image(filename: Optional[str]) -> bool:
    return image_extension(filename) in {ext.lower() for ext in settings.ALLOWED_IMAGE_EXTENSIONS}


def default_image_name(filename: str) -> str:
    """Filename with its last extension stripped, e.g. ``photo.PNG`` -> ``photo``."""
    if "." not in filename:
        return filename
    stem = filename.rsplit(".", 1)[0]
    return stem or filename


def allowed_image_media_types() -> set:
    return {f"image/{_MEDIA_SUBTYPES.get(ext.lower(), ext.lower())}" for ext in settings.ALLOWED_IMAGE_EXTENSIONS}


def is_allowed_image_type(media_type: Optional[str]) -> bool:
    base = (media_type or "").split(";", 1)[0].strip().lower()
    return base in allowed_image_media_types()
