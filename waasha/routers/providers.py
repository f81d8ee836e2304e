from fastapi import APIRouter, Depends, Path, status

from waasha.dependencies import get_current_provider, get_provider_service
from waasha.models.provider import ProviderBusinessRegister, ProviderProfileCreate
from waasha.models.user import MAX_ID, AccountRead
from waasha.services.providers import ProviderProfileService

router = APIRouter(tags=["providers"])


@router.post("/service-providers", status_code=status.HTTP_201_CREATED)
def create_provider_profile(
    payload: ProviderProfileCreate,
    providers: ProviderProfileService = Depends(get_provider_service),
):
    profile = providers.create_profile(
        account_id=payload.user_id,
        business_name=payload.business_name,
        selected_services=payload.services,
        location=payload.location,
        description=payload.description,
    )

    return {
        "success": True,
        "message": "Provider profile created successfully",
        "provider": profile,
    }


@router.get("/service-providers/user/{user_id}")
def get_provider_profile(
    user_id: int = Path(ge=1, le=MAX_ID),
    providers: ProviderProfileService = Depends(get_provider_service),
):
    return {
        "success": True,
        "provider": providers.get_profile_by_account(user_id),
    }


@router.post("/provider/register", status_code=status.HTTP_201_CREATED)
def register_provider_business(
    payload: ProviderBusinessRegister,
    current_provider: AccountRead = Depends(get_current_provider),
    providers: ProviderProfileService = Depends(get_provider_service),
):
    profile = providers.create_profile(
        account_id=current_provider.id,
        business_name=payload.business_name,
        selected_services=payload.services,
        location=payload.location,
        description=payload.description,
        provider_type=payload.provider_type,
        offers_home_request=payload.offers_home_request,
        offers_walk_in=payload.offers_walk_in,
        offers_drive_in=payload.offers_drive_in,
    )

    return {
        "success": True,
        "message": "Provider business registered successfully",
        "provider": profile,
    }
