"""Ad catalog: listing with seller enrichment, creation and deletion."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import update
from sqlalchemy.orm import Session

from classifieds.core.errors import NotFoundError, ValidationError
from classifieds.models import Ad, Conversation, User
from classifieds.schemas.ad import AdCreate, AdResponse, AdSummary, EnrichedAdResponse
from classifieds.services.images import StoredImage

logger = logging.getLogger(__name__)


def _seller_names(db: Session, seller_ids: set[int]) -> dict[int, str]:
    """Resolve seller ids to display names, failing if any is missing."""
    if not seller_ids:
        return {}
    rows = db.query(User.id, User.name).filter(User.id.in_(seller_ids)).all()
    names = {user_id: name for user_id, name in rows}
    missing = seller_ids - names.keys()
    if missing:
        raise NotFoundError("Seller not found", errors={"seller": sorted(missing)})
    return names


def enrich_ads(db: Session, ads: Sequence[Ad]) -> list[EnrichedAdResponse]:
    """Attach the current seller name to each ad."""
    names = _seller_names(db, {ad.seller_id for ad in ads})
    return [
        EnrichedAdResponse(
            **AdResponse.model_validate(ad).model_dump(),
            seller_name=names[ad.seller_id],
        )
        for ad in ads
    ]


def get_ad(db: Session, ad_id: int) -> Ad:
    """Return an ad by id or raise ``NotFoundError``."""
    ad = db.get(Ad, ad_id)
    if ad is None:
        raise NotFoundError("Ad not found")
    return ad


def list_ads(
    db: Session,
    *,
    ad_id: int | None = None,
    seller_id: int | None = None,
) -> EnrichedAdResponse | list[EnrichedAdResponse]:
    """List the catalog, newest first.

    Args:
        db: Database session
        ad_id: Return only this ad (takes precedence over ``seller_id``)
        seller_id: Return only ads referencing this seller

    Returns:
        A single enriched ad when ``ad_id`` is given, otherwise a list of
        enriched ads ordered by ``created_at`` descending.

    Raises:
        NotFoundError: If ``ad_id`` does not exist or any seller reference
            cannot be resolved.
    """
    if ad_id is not None:
        return enrich_ads(db, [get_ad(db, ad_id)])[0]

    query = db.query(Ad)
    if seller_id is not None:
        query = query.filter(Ad.seller_id == seller_id)
    ads = query.order_by(Ad.created_at.desc(), Ad.id.desc()).all()
    return enrich_ads(db, ads)


def create_ad(
    db: Session, fields: AdCreate, image: StoredImage | None, *, commit: bool = True
) -> Ad:
    """Persist a new ad on behalf of ``fields.seller``.

    The caller's identity is not compared to the seller; any authenticated
    caller may post for any existing seller. With ``commit=False`` the row is
    only flushed, leaving the transaction to the caller.

    Raises:
        ValidationError: If the image is missing or the seller does not exist.
    """
    if image is None:
        raise ValidationError("Could not save ad", errors={"image": "is required"})
    if db.get(User, fields.seller) is None:
        raise ValidationError("Could not save ad", errors={"seller": "does not exist"})

    ad = Ad(
        title=fields.title,
        info=fields.info,
        price=fields.price,
        category=fields.category,
        location=fields.location,
        delivery=fields.delivery,
        image_url=image.image_url,
        image_id=image.image_id,
        seller_id=fields.seller,
    )
    db.add(ad)
    if not commit:
        db.flush()
        return ad
    db.commit()
    db.refresh(ad)
    logger.info("Created ad %d for seller %d", ad.id, ad.seller_id)
    return ad


def delete_ad(db: Session, ad_id: int) -> StoredImage:
    """Delete an ad by id, detaching any conversations that refer to it.

    Returns:
        The image reference of the removed ad, so its file can be discarded.

    Raises:
        NotFoundError: If the ad does not exist.
    """
    ad = get_ad(db, ad_id)
    image = StoredImage(image_id=ad.image_id, image_url=ad.image_url)
    db.execute(
        update(Conversation).where(Conversation.ad_id == ad_id).values(ad_id=None)
    )
    db.delete(ad)
    db.commit()
    logger.info("Deleted ad %d", ad_id)
    return image


def summarize_ad(ad: Ad) -> AdSummary:
    """Return the fields of an ad shown in conversation views."""
    return AdSummary.model_validate(ad)
