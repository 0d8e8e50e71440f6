from pydantic import BaseModel, Field, computed_field, field_validator, ConfigDict
from typing import List, Optional
from datetime import datetime
from shortlink_app.config import settings
from shortlink_app.utils.validators import is_valid_url


class ClickEvent(BaseModel):
    """A single recorded visit to a short link"""
    timestamp: datetime
    source: str = "direct"
    location: str = "unknown"


class ShortenedURL(BaseModel):
    """Stored short link record

    This is both the persisted shape (one element of the JSON array kept
    under the urls storage key) and the API response body. Dates are
    written as ISO strings and parsed back into datetimes on read.
    """
    id: str
    original_url: str
    short_code: str
    short_url: str
    validity_minutes: int = Field(..., ge=1)
    created_at: datetime
    expires_at: datetime
    click_count: int = Field(0, ge=0)
    click_events: List[ClickEvent] = Field(default_factory=list)

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


class URLEntry(BaseModel):
    """One row of the shortening form

    Validation errors come back as 422 responses whose loc points at the
    offending field, so they can be shown next to it.
    """
    original_url: str = Field(..., description="The original URL to be shortened")
    validity_minutes: int = Field(
        settings.default_validity_minutes,
        ge=1,
        le=settings.max_validity_minutes,
        description="Lifetime of the short link in minutes"
    )
    custom_code: Optional[str] = Field(
        None,
        min_length=settings.min_custom_code_length,
        description="Preferred short code (random if omitted)"
    )

    @field_validator("original_url")
    @classmethod
    def check_original_url(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("URL is required")
        if not is_valid_url(value):
            raise ValueError("Please enter a valid URL")
        return value

    @field_validator("custom_code", mode="before")
    @classmethod
    def blank_custom_code_is_none(cls, value):
        # An empty form field means "generate one for me"
        if isinstance(value, str) and not value.strip():
            return None
        return value


class URLBatchCreate(BaseModel):
    entries: List[URLEntry] = Field(
        ...,
        min_length=1,
        max_length=settings.max_batch_size,
        description="Up to five URLs shortened in one request"
    )


class BatchItemResult(BaseModel):
    """Outcome for one entry of a batch: either url or error is set"""
    index: int
    url: Optional[ShortenedURL] = None
    error: Optional[str] = None

    @computed_field
    @property
    def success(self) -> bool:
        return self.url is not None


class BatchCreateResponse(BaseModel):
    results: List[BatchItemResult]

    @computed_field
    @property
    def created(self) -> int:
        return sum(1 for result in self.results if result.url is not None)

    @computed_field
    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if result.url is None)


class URLStats(BaseModel):
    short_code: str
    original_url: str
    click_count: int
    created_at: datetime
    expires_at: datetime
    is_expired: bool
    last_accessed: Optional[datetime] = None
    click_events: List[ClickEvent] = Field(default_factory=list)

    # Pydantic V2 style configuration
    model_config = ConfigDict(from_attributes=True)


class TableStatistics(BaseModel):
    """Aggregate numbers shown on the statistics page"""
    total_urls: int
    total_clicks: int
    active_urls: int
    expired_urls: int


class CleanupResult(BaseModel):
    removed: int
