"""
Community Benefits API endpoints.

Public reads of active benefits and the homepage selection; admins manage
the catalogue.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict

from careerhub.repositories import Stores
from careerhub.services import benefits as benefit_service
from careerhub.services.auth import Identity
from careerhub.api.v1.auth import get_current_identity, get_stores

router = APIRouter()


# ============== Pydantic Schemas ==============


class BenefitCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    description: str
    business_name: str
    discount_percentage: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    valid_until: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: Optional[list[str]] = None


class BenefitUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    business_name: Optional[str] = None
    discount_percentage: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    valid_until: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: Optional[list[str]] = None
    is_active: Optional[bool] = None
    show_on_homepage: Optional[bool] = None


# ============== API Endpoints ==============


@router.get("")
def list_benefits(
    request: Request,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return benefit_service.list_benefits(stores, dict(request.query_params), identity)


@router.get("/homepage")
def homepage_benefits(stores: Stores = Depends(get_stores)):
    """Active benefits featured on the homepage."""
    return benefit_service.list_homepage_benefits(stores)


@router.post("", status_code=201)
def create_benefit(
    payload: BenefitCreate,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return benefit_service.create_benefit(stores, payload.model_dump(exclude_none=True), identity)


@router.get("/{benefit_id}")
def get_benefit(
    benefit_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return benefit_service.get_benefit(stores, benefit_id, identity)


@router.patch("/{benefit_id}")
def update_benefit(
    benefit_id: int,
    payload: BenefitUpdate,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return benefit_service.update_benefit(
        stores, benefit_id, payload.model_dump(exclude_unset=True), identity
    )


@router.delete("/{benefit_id}")
def delete_benefit(
    benefit_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    benefit_service.delete_benefit(stores, benefit_id, identity)
    return {"message": "Community benefit deleted"}
