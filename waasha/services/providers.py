import logging
from typing import List, Optional, Sequence

from sqlmodel import Session, select

from waasha.core.exceptions import (
    AccountNotFoundError,
    DuplicateProfileError,
    InvalidAccountKindError,
    ProfileNotFoundError,
    ValidationError,
)
from waasha.database import commit_or_raise, storage_errors
from waasha.models.provider import (
    BusinessCategory,
    ProviderProfile,
    ProviderProfileRead,
    ProviderType,
)
from waasha.models.user import Account, AccountKind
from waasha.services.catalog import ServiceCatalog

logger = logging.getLogger(__name__)

# this many services or more, without a car wash, makes a salon
SALON_MIN_SERVICES = 3


def derive_provider_type(services: Sequence[str]) -> ProviderType:
    if "carwash" in services:
        return ProviderType.CARWASH
    if len(services) >= SALON_MIN_SERVICES:
        return ProviderType.SALON
    return ProviderType.INDIVIDUAL


class ProviderProfileService:
    def __init__(self, session: Session, catalog: ServiceCatalog):
        self.session = session
        self.catalog = catalog

    def create_profile(
        self,
        account_id: int,
        business_name: str,
        selected_services: Sequence[str],
        location: Optional[str] = None,
        description: Optional[str] = None,
        provider_type: Optional[ProviderType] = None,
        offers_home_request: Optional[bool] = None,
        offers_walk_in: Optional[bool] = None,
        offers_drive_in: Optional[bool] = None,
    ) -> ProviderProfileRead:
        """
        Creates the business profile of a provider account.

        Category comes from the first selected service and the provider type
        from the whole selection unless one is given. Offer flags default to
        home request and walk-in on, drive-in only for car washes.
        """
        services = self._clean_services(selected_services)

        business_name = (business_name or "").strip()
        if not business_name:
            raise ValidationError("Business name is required.")

        with storage_errors(self.session):
            account = self.session.get(Account, account_id)
            if account is None:
                raise AccountNotFoundError()

            if account.user_type != AccountKind.PROVIDER:
                raise InvalidAccountKindError("Only provider accounts can create a provider profile.")

            existing = self.session.exec(
                select(ProviderProfile).where(ProviderProfile.user_id == account_id)
            ).first()

        if existing:
            raise DuplicateProfileError()

        offers_carwash = "carwash" in services

        profile = ProviderProfile(
            user_id=account_id,
            business_name=business_name,
            provider_type=provider_type or derive_provider_type(services),
            business_category=self.derive_category(services),
            location=(location or "").strip() or None,
            description=(description or "").strip() or None,
            offers_home_request=True if offers_home_request is None else offers_home_request,
            offers_walk_in=True if offers_walk_in is None else offers_walk_in,
            offers_drive_in=offers_carwash if offers_drive_in is None else offers_drive_in,
        )

        self.session.add(profile)
        commit_or_raise(self.session, DuplicateProfileError)
        self.session.refresh(profile)

        logger.info(
            "Created provider profile id=%s for account id=%s (%s / %s)",
            profile.id,
            account_id,
            profile.provider_type.value,
            profile.business_category.value,
        )

        read = ProviderProfileRead.model_validate(profile)
        read.services = services
        return read

    def get_profile_by_account(self, account_id: int) -> ProviderProfileRead:
        with storage_errors(self.session):
            profile = self.session.exec(
                select(ProviderProfile).where(ProviderProfile.user_id == account_id)
            ).first()

        if profile is None:
            raise ProfileNotFoundError()

        return ProviderProfileRead.model_validate(profile)

    def derive_category(self, services: Sequence[str]) -> BusinessCategory:
        return self.catalog.category_for(services[0])

    def _clean_services(self, selected_services: Sequence[str]) -> List[str]:
        if not selected_services:
            raise ValidationError("Please select at least one service.")

        services: List[str] = []
        for sid in selected_services:
            sid = (sid or "").strip().lower()
            if sid and sid not in services:
                services.append(sid)

        if not services:
            raise ValidationError("Please select at least one service.")

        unknown = self.catalog.unknown(services)
        if unknown:
            raise ValidationError(f"Unknown service(s): {', '.join(unknown)}.")

        return services
