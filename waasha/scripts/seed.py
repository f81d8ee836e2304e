import logging

from sqlmodel import Session, select

from waasha.config import get_settings
from waasha.core.logging_config import configure_logging
from waasha.database import create_db_and_tables, engine
from waasha.models.provider import ProviderProfile
from waasha.models.service import ServiceListing
from waasha.models.user import Account, AccountKind
from waasha.services.accounts import AccountService
from waasha.services.catalog import DEFAULT_CATALOG
from waasha.services.listings import ServiceListingService
from waasha.services.providers import ProviderProfileService

logger = logging.getLogger(__name__)

PROVIDER_EMAIL = "demo.provider@waasha.app"
PROVIDER_PASSWORD = "waasha123"

DEMO_LISTINGS = [
    dict(title="Wash & Blow-dry", category="Hair", price=25.0, duration_minutes=45),
    dict(title="Box Braids", category="Hair", price=80.0, duration_minutes=240),
    dict(title="Gel Manicure", category="Nails", price=30.0, duration_minutes=60),
]


def main():
    settings = get_settings()
    configure_logging(settings)
    create_db_and_tables()

    with Session(engine) as session:
        # 1) demo provider account
        provider = session.exec(select(Account).where(Account.email == PROVIDER_EMAIL)).first()
        if not provider:
            result = AccountService(session, settings).register(
                username="Demo Provider",
                email=PROVIDER_EMAIL,
                password=PROVIDER_PASSWORD,
                phone_number="+233 20 000 0000",
                account_kind=AccountKind.PROVIDER,
            )
            provider_id = result.account.id
        else:
            provider_id = provider.id

        # 2) business profile
        profile = session.exec(
            select(ProviderProfile).where(ProviderProfile.user_id == provider_id)
        ).first()
        if not profile:
            ProviderProfileService(session, DEFAULT_CATALOG).create_profile(
                account_id=provider_id,
                business_name="Demo Beauty Studio",
                selected_services=["hair", "nails", "makeup"],
                location="Accra",
                description="Demo salon created by the seed script",
            )

        # 3) a few priced services
        existing_listing = session.exec(
            select(ServiceListing).where(ServiceListing.provider_id == provider_id)
        ).first()
        if not existing_listing:
            listings = ServiceListingService(session, DEFAULT_CATALOG)
            for listing in DEMO_LISTINGS:
                listings.create_listing(provider_id=provider_id, **listing)

    logger.info("Seed complete. Provider id=%s (%s / %s)", provider_id, PROVIDER_EMAIL, PROVIDER_PASSWORD)


if __name__ == "__main__":
    main()
