"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app.
"""

from fastapi import APIRouter

from careerhub.api.v1 import (
    auth,
    postings,
    archive,
    cv_showcase,
    applications,
    whitelist,
    access_requests,
    files,
    admin,
    directory,
    benefits,
)

api_router = APIRouter()

# Include all v1 routers with their prefixes and tags
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    postings.router,
    prefix="/postings",
    tags=["Postings"],
)

api_router.include_router(
    archive.router,
    prefix="/archive",
    tags=["Archive"],
)

api_router.include_router(
    cv_showcase.router,
    prefix="/cv-showcase",
    tags=["CV Showcase"],
)

api_router.include_router(
    applications.router,
    prefix="/applications",
    tags=["Applications"],
)

api_router.include_router(
    whitelist.router,
    prefix="/whitelist",
    tags=["Whitelist"],
)

api_router.include_router(
    access_requests.router,
    prefix="/access-requests",
    tags=["Access Requests"],
)

api_router.include_router(
    files.router,
    prefix="/files",
    tags=["Files"],
)

api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["Admin"],
)

api_router.include_router(
    directory.router,
    prefix="/profiles",
    tags=["Professional Directory"],
)

api_router.include_router(
    benefits.router,
    prefix="/community-benefits",
    tags=["Community Benefits"],
)
