from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from waasha.models.user import utcnow


class ServiceListingBase(SQLModel):
    title: str
    category: str
    price: float
    description: Optional[str] = None
    duration_minutes: Optional[int] = None
    available: bool = True


class ServiceListing(ServiceListingBase, table=True):
    __tablename__ = "service_listings"

    id: Optional[int] = Field(default=None, primary_key=True)

    provider_id: int = Field(foreign_key="accounts.id", index=True)

    created_at: datetime = Field(default_factory=utcnow)


class ServiceListingCreate(ServiceListingBase):
    pass


class ServiceListingRead(ServiceListingBase):
    id: int
    provider_id: int
    created_at: datetime


class CatalogEntry(SQLModel):
    id: str
    name: str
    category: str
