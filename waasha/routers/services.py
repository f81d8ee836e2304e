from fastapi import APIRouter, Depends, Path, status

from waasha.dependencies import get_current_provider, get_listing_service
from waasha.models.service import ServiceListingCreate
from waasha.models.user import MAX_ID, AccountRead
from waasha.services.listings import ServiceListingService


router = APIRouter(
    prefix="/services",
    tags=["services"]
)


@router.get("/categories")
def list_categories(listings: ServiceListingService = Depends(get_listing_service)):
    return {
        "success": True,
        "categories": listings.list_categories(),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_service(
    service: ServiceListingCreate,
    current_provider: AccountRead = Depends(get_current_provider),
    listings: ServiceListingService = Depends(get_listing_service),
):
    listing = listings.create_listing(
        provider_id=current_provider.id,
        title=service.title,
        category=service.category,
        price=service.price,
        description=service.description,
        duration_minutes=service.duration_minutes,
        available=service.available,
    )

    return {
        "success": True,
        "message": "Service added successfully",
        "service": listing,
    }


@router.get("/provider/{user_id}")
def list_provider_services(
    user_id: int = Path(ge=1, le=MAX_ID),
    listings: ServiceListingService = Depends(get_listing_service),
):
    return {
        "success": True,
        "services": listings.list_listings(user_id),
    }


@router.get("/{service_id}")
def get_service(
    service_id: int = Path(ge=1, le=MAX_ID),
    listings: ServiceListingService = Depends(get_listing_service),
):
    return {
        "success": True,
        "service": listings.get_listing(service_id),
    }
