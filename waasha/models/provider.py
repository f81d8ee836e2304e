from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlmodel import SQLModel, Field

from waasha.models.user import MAX_ID, utcnow


class ProviderType(str, Enum):
    INDIVIDUAL = "Individual"
    SALON = "Salon"
    CARWASH = "Carwash"
    BARBERSHOP = "Barbershop"
    TRAINING_CENTER = "Training Center"


class BusinessCategory(str, Enum):
    HAIR = "Hair"
    CARWASH = "Carwash"
    TRAINING = "Training"


class ProviderProfileBase(SQLModel):
    business_name: str
    provider_type: ProviderType
    business_category: BusinessCategory
    location: Optional[str] = None
    description: Optional[str] = None

    offers_home_request: bool = True
    offers_walk_in: bool = True
    offers_drive_in: bool = False


class ProviderProfile(ProviderProfileBase, table=True):
    __tablename__ = "provider_profiles"

    id: Optional[int] = Field(default=None, primary_key=True)

    # one profile per account, enforced by the unique index
    user_id: int = Field(foreign_key="accounts.id", unique=True, index=True)

    created_at: datetime = Field(default_factory=utcnow)


# =========================
# SCHEMAS
# =========================

class ProviderProfileCreate(SQLModel):
    """Two-step flow: account already registered, services chosen afterwards."""

    user_id: int = Field(ge=1, le=MAX_ID)
    business_name: str
    services: List[str]
    location: Optional[str] = None
    description: Optional[str] = None


class ProviderBusinessRegister(SQLModel):
    """Single-step flow for the signed-in provider, with every business field."""

    business_name: str
    services: List[str]
    provider_type: Optional[ProviderType] = None
    location: Optional[str] = None
    description: Optional[str] = None
    offers_home_request: Optional[bool] = None
    offers_walk_in: Optional[bool] = None
    offers_drive_in: Optional[bool] = None


class ProviderProfileRead(ProviderProfileBase):
    id: int
    user_id: int
    created_at: datetime
    services: List[str] = []
