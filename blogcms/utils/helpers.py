"""File storage and time helpers shared by the services."""

import os
import uuid
from datetime import datetime, timezone

from blogcms.config import settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def store_upload(content: bytes, subfolder: str, ext: str) -> dict:
    folder = os.path.join(settings.UPLOAD_DIR, subfolder)
    os.makedirs(folder, exist_ok=True)

    filename = f"{uuid.uuid4().hex}.{ext}"
    path = os.path.join(folder, filename)

    with open(path, "wb") as f:
        f.write(content)

    public_id = f"{subfolder}/{filename}".replace("\\", "/")
    return {
        "public_id": public_id,
        "url": f"/uploads/{public_id}",
        "size": len(content),
    }


def remove_upload(public_id: str) -> bool:
    abs_path = os.path.join(settings.UPLOAD_DIR, public_id.replace("/", os.sep))
    if not os.path.exists(abs_path):
        return False
    os.remove(abs_path)
    return True
