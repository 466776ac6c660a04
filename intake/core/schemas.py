"""Data schemas for extraction requests and event candidates."""
from typing import Optional, Literal
from pydantic import BaseModel, Field

Category = Literal["social", "business", "entertainment"]
CATEGORIES = ("social", "business", "entertainment")

DEFAULT_TITLE = "Unnamed Event"
DEFAULT_LOCATION_NAME = "Unknown Location"
DEFAULT_CATEGORY: Category = "social"


class UploadedImage(BaseModel):
    """An uploaded photo or flyer."""
    data: bytes = Field(repr=False)
    mime_type: str = "application/octet-stream"
    filename: Optional[str] = None


class ExtractionRequest(BaseModel):
    """Request to extract an event. Exactly one of url/image must be set."""
    url: Optional[str] = None
    image: Optional[UploadedImage] = None

    @property
    def has_url(self) -> bool:
        return bool(self.url and self.url.strip())

    @property
    def has_image(self) -> bool:
        return self.image is not None and len(self.image.data) > 0


class EventLocation(BaseModel):
    """Location information for an event."""
    name: str = DEFAULT_LOCATION_NAME


class EventCandidate(BaseModel):
    """Normalized event draft returned to the client. Every field is always set."""
    title: str = DEFAULT_TITLE
    datetime: Optional[str] = Field(
        default=None,
        description="ISO 8601 UTC instant, or null if absent or unparsable"
    )
    location: EventLocation = Field(default_factory=EventLocation)
    description: str = ""
    category: Category = DEFAULT_CATEGORY


class ErrorResponse(BaseModel):
    """Error body returned for any failed request."""
    error: str
