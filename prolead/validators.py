from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

LeadStatus = Literal["new", "contacted", "qualified", "converted", "lost"]


class LeadCreateRequest(BaseModel):
    name: str
    address: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    business_type: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    reviews: Optional[int] = Field(default=None, ge=0)
    place_id: Optional[str] = None
    notes: Optional[str] = None
    status: LeadStatus = "new"
    tags: List[str] = Field(default_factory=list)
    contact_person: Optional[str] = None
    company_size: Optional[str] = None
    revenue: Optional[str] = None
    last_contact: Optional[datetime] = None

    @field_validator("name", "address")
    @classmethod
    def must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field must not be empty")
        return v.strip()


class LeadUpdateRequest(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    business_type: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    notes: Optional[str] = None
    status: Optional[LeadStatus] = None
    tags: Optional[List[str]] = None
    contact_person: Optional[str] = None
    company_size: Optional[str] = None
    revenue: Optional[str] = None
    last_contact: Optional[datetime] = None

    @field_validator("name", "address")
    @classmethod
    def must_not_be_blank(cls, v: Optional[str]) -> str:
        # Only reached when the field is sent; name and address cannot be cleared.
        if v is None or not v.strip():
            raise ValueError("Field must not be empty")
        return v.strip()

    @field_validator("status", "tags")
    @classmethod
    def must_not_be_null(cls, v):
        if v is None:
            raise ValueError("Field must not be null")
        return v


class ImportedLead(LeadCreateRequest):
    """A lead as written by the export endpoint, ids and timestamps included."""

    id: UUID
    created_at: datetime
    updated_at: datetime


class CaptureFromPlaceRequest(BaseModel):
    place_id: str

    @field_validator("place_id")
    @classmethod
    def place_id_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("place_id must not be empty")
        return v.strip()


class LeadFilter(BaseModel):
    business_type: Optional[str] = None
    industry: Optional[str] = None
    status: Optional[LeadStatus] = None
    min_rating: Optional[float] = Field(default=None, ge=0, le=5)
    tags: List[str] = Field(default_factory=list)
    has_phone: Optional[bool] = None
    has_email: Optional[bool] = None
    has_website: Optional[bool] = None
    has_contact_person: Optional[bool] = None
    center_lat: Optional[float] = Field(default=None, ge=-90, le=90)
    center_lng: Optional[float] = Field(default=None, ge=-180, le=180)
    radius: Optional[int] = Field(default=None, gt=0)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        if isinstance(v, str):
            return [tag.strip() for tag in v.split(",") if tag.strip()]
        return v

    @model_validator(mode="after")
    def center_needs_both_coordinates(self):
        if (self.center_lat is None) != (self.center_lng is None):
            raise ValueError("center_lat and center_lng must be given together")
        return self


class NearbySearchRequest(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    radius: int = Field(default=5000, gt=0, le=50000)
    type: Optional[str] = None
    require_contact: bool = False
    max_results: int = Field(default=20, ge=1, le=60)


class AutocompleteRequest(BaseModel):
    input: str
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)

    @field_validator("input")
    @classmethod
    def input_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("input must not be empty")
        return v.strip()


class AccessRequest(BaseModel):
    word: str
