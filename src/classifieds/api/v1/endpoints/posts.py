# src/classifieds/api/v1/endpoints/posts.py
"""Ad catalog endpoints."""

from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile, status
from pydantic import ValidationError as SchemaValidationError

from classifieds.api.v1.dependencies import CurrentUserDep, ImageStoreDep, SessionDep
from classifieds.core.errors import ValidationError
from classifieds.schemas.ad import AdCreate, AdDeleted, AdResponse, EnrichedAdResponse
from classifieds.services import ads as ad_service

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=EnrichedAdResponse | list[EnrichedAdResponse])
def list_posts(
    db: SessionDep,
    ad_id: int | None = Query(None, alias="id", description="Return only this ad"),
    user_id: int | None = Query(None, alias="userId", description="Return ads of this seller"),
) -> EnrichedAdResponse | list[EnrichedAdResponse]:
    """List ads newest first, or fetch one ad or one seller's ads.

    Args:
        db: Database session
        ad_id: Ad identifier; returns a single object instead of a list
        user_id: Seller identifier to filter by

    Returns:
        Ads enriched with their seller's current display name

    Raises:
        NotFoundError: If the requested ad or a referenced seller is missing
    """
    return ad_service.list_ads(db, ad_id=ad_id, seller_id=user_id)


@router.post("", response_model=AdResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    current_user: CurrentUserDep,
    db: SessionDep,
    image_store: ImageStoreDep,
    title: Annotated[str, Form()],
    info: Annotated[str, Form()],
    price: Annotated[str, Form()],
    delivery: Annotated[str, Form()],
    seller: Annotated[str, Form()],
    category: Annotated[str | None, Form()] = None,
    location: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> AdResponse:
    """Create an ad from a multipart form with an image file."""
    try:
        fields = AdCreate(
            title=title,
            info=info,
            price=price,
            category=category or None,
            location=location or None,
            delivery=delivery,
            seller=seller,
        )
    except SchemaValidationError as err:
        raise ValidationError("Could not save ad", errors=err.errors(include_url=False)) from err

    stored = None
    if image is not None and image.filename:
        stored = image_store.save(image.file, image.filename)
    try:
        ad = ad_service.create_ad(db, fields, stored)
    except ValidationError:
        if stored is not None:
            image_store.delete(stored.image_url)
        raise
    return AdResponse.model_validate(ad)


@router.delete("/{ad_id}", response_model=AdDeleted)
def delete_post(
    ad_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    image_store: ImageStoreDep,
) -> AdDeleted:
    """Delete an ad by id together with its stored image.

    Any authenticated caller may delete any ad; missing ids return 404.
    """
    removed = ad_service.delete_ad(db, ad_id)
    image_store.delete(removed.image_url)
    return AdDeleted(deleted=ad_id)
