"""Ad-related Pydantic schemas."""

from pydantic import Field

from classifieds.schemas.common import CamelModel, UtcDatetime


class AdCreate(CamelModel):
    """Text fields of a new ad; the image arrives separately as a file part."""

    title: str = Field(..., min_length=1)
    info: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    category: str | None = None
    location: str | None = None
    delivery: str = Field(..., min_length=1)
    seller: int


class AdResponse(CamelModel):
    """A stored ad as returned after creation."""

    id: int
    title: str
    info: str
    price: float
    category: str | None
    location: str | None
    delivery: str
    image_url: str
    image_id: str
    seller_id: int
    created_at: UtcDatetime


class EnrichedAdResponse(AdResponse):
    """An ad with the seller reference resolved to a display name."""

    seller_name: str


class AdSummary(CamelModel):
    """Ad fields shown alongside a conversation."""

    id: int
    title: str
    image_url: str
    price: float
    location: str | None
    delivery: str


class AdDeleted(CamelModel):
    """Acknowledgement returned after an ad is removed."""

    deleted: int
