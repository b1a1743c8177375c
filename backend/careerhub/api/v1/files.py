"""
File API endpoints.

Upload tickets and download URLs for the external blob store that holds CV
files.
"""

from fastapi import APIRouter

from careerhub.services import files as file_service

router = APIRouter()


@router.post("/upload-url")
def request_upload():
    """Issue a storage id and a one-off URL to upload the file to."""
    return file_service.request_upload()


@router.get("/{storage_id}")
def get_file_url(storage_id: str):
    return {"storage_id": storage_id, "url": file_service.file_url(storage_id)}
