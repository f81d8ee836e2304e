from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from waasha.config import Settings, get_settings
from waasha.core.exceptions import InvalidAccountKindError, InvalidTokenError
from waasha.database import get_session
from waasha.models.user import AccountKind, AccountRead
from waasha.services.accounts import AccountService
from waasha.services.catalog import DEFAULT_CATALOG, ServiceCatalog
from waasha.services.listings import ServiceListingService
from waasha.services.providers import ProviderProfileService

security = HTTPBearer(auto_error=False)


def get_catalog() -> ServiceCatalog:
    return DEFAULT_CATALOG


def get_account_service(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> AccountService:
    return AccountService(session, settings)


def get_provider_service(
    session: Session = Depends(get_session),
    catalog: ServiceCatalog = Depends(get_catalog),
) -> ProviderProfileService:
    return ProviderProfileService(session, catalog)


def get_listing_service(
    session: Session = Depends(get_session),
    catalog: ServiceCatalog = Depends(get_catalog),
) -> ServiceListingService:
    return ServiceListingService(session, catalog)


def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    accounts: AccountService = Depends(get_account_service),
) -> AccountRead:
    """
    Validates the bearer token and returns the account it belongs to,
    freshly loaded from the database.
    """
    if credentials is None:
        raise InvalidTokenError()

    return accounts.verify(credentials.credentials)


def get_current_provider(
    current_account: AccountRead = Depends(get_current_account),
) -> AccountRead:
    if current_account.user_type != AccountKind.PROVIDER:
        raise InvalidAccountKindError()

    return current_account
