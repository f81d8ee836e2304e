import logging
import math
from typing import List, Optional

from sqlmodel import Session, select

from waasha.core.exceptions import (
    AccountNotFoundError,
    InvalidAccountKindError,
    ServiceNotFoundError,
    StorageError,
    ValidationError,
)
from waasha.database import commit_or_raise, storage_errors
from waasha.models.service import CatalogEntry, ServiceListing, ServiceListingRead
from waasha.models.user import MAX_ID, Account, AccountKind
from waasha.services.catalog import ServiceCatalog

logger = logging.getLogger(__name__)


class ServiceListingService:
    """Individual priced services a provider advertises."""

    def __init__(self, session: Session, catalog: ServiceCatalog):
        self.session = session
        self.catalog = catalog

    def list_categories(self) -> List[CatalogEntry]:
        return [
            CatalogEntry(id=entry.id, name=entry.name, category=entry.category.value)
            for entry in self.catalog.entries()
        ]

    def create_listing(
        self,
        provider_id: int,
        title: str,
        category: str,
        price: float,
        description: Optional[str] = None,
        duration_minutes: Optional[int] = None,
        available: bool = True,
    ) -> ServiceListingRead:
        title = (title or "").strip()
        category = (category or "").strip()

        if not title or not category:
            raise ValidationError("Please fill in all required fields.")

        # NaN compares false both ways, so finiteness is checked first
        if price is None or not math.isfinite(price) or price <= 0:
            raise ValidationError("Price must be greater than 0.")

        if duration_minutes is not None and not 0 < duration_minutes <= MAX_ID:
            raise ValidationError("Duration must be a positive number of minutes.")

        provider = self._get_account(provider_id)
        if provider.user_type != AccountKind.PROVIDER:
            raise InvalidAccountKindError("Only provider accounts can add services.")

        listing = ServiceListing(
            provider_id=provider_id,
            title=title,
            category=category,
            price=price,
            description=(description or "").strip() or None,
            duration_minutes=duration_minutes,
            available=available,
        )

        self.session.add(listing)
        commit_or_raise(self.session, StorageError)
        self.session.refresh(listing)

        logger.info("Provider id=%s added service id=%s", provider_id, listing.id)

        return ServiceListingRead.model_validate(listing)

    def list_listings(self, provider_id: int) -> List[ServiceListingRead]:
        self._get_account(provider_id)

        with storage_errors(self.session):
            listings = self.session.exec(
                select(ServiceListing)
                .where(ServiceListing.provider_id == provider_id)
                .order_by(ServiceListing.id)
            ).all()

        return [ServiceListingRead.model_validate(listing) for listing in listings]

    def get_listing(self, listing_id: int) -> ServiceListingRead:
        with storage_errors(self.session):
            listing = self.session.get(ServiceListing, listing_id)

        if listing is None:
            raise ServiceNotFoundError()

        return ServiceListingRead.model_validate(listing)

    def _get_account(self, account_id: int) -> Account:
        with storage_errors(self.session):
            account = self.session.get(Account, account_id)

        if account is None:
            raise AccountNotFoundError()

        return account
