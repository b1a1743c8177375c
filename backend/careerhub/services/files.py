"""
Upload tickets for the external blob store.

Files never pass through this service. A client asks for a ticket, uploads
the bytes straight to the blob store, then attaches the returned storage id
to its CV or application.
"""

import secrets
import uuid
from urllib.parse import quote

from careerhub.core.config import settings
from careerhub.core.errors import ValidationError


def _base_url() -> str:
    return settings.FILE_STORE_URL.rstrip("/")


def request_upload() -> dict[str, str]:
    """
    Issue a fresh storage id and a one-off upload URL for it.

    Returns:
        {"storage_id", "upload_url"}
    """
    storage_id = uuid.uuid4().hex
    token = secrets.token_urlsafe(24)
    return {
        "storage_id": storage_id,
        "upload_url": f"{_base_url()}/upload/{storage_id}?token={token}",
    }


def file_url(storage_id: str) -> str:
    """Download URL of a stored file reference."""
    if not storage_id or not storage_id.strip():
        raise ValidationError("storage_id is required")
    return f"{_base_url()}/files/{quote(storage_id.strip(), safe='')}"
