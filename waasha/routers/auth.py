from fastapi import APIRouter, Depends, status

from waasha.dependencies import get_account_service, get_current_account
from waasha.models.user import AccountCreate, AccountRead, AuthUser, LoginRequest
from waasha.services.accounts import AccountService, AuthResult

router = APIRouter(tags=["auth"])


def _auth_payload(result: AuthResult, message: str) -> dict:
    user = AuthUser(**result.account.model_dump(), token=result.token)
    return {
        "success": True,
        "message": message,
        "user": user,
        "token": result.token,
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    payload: AccountCreate,
    accounts: AccountService = Depends(get_account_service),
):
    result = accounts.register(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        phone_number=payload.phone_number,
        account_kind=payload.user_type,
    )

    return _auth_payload(result, "Account created successfully")


@router.post("/login")
def login(
    payload: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
):
    result = accounts.login(payload.email, payload.password)

    return _auth_payload(result, "Login successful")


@router.get("/verify-token")
def verify_token(current_account: AccountRead = Depends(get_current_account)):
    return {
        "success": True,
        "user": current_account,
    }
