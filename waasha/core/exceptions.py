from typing import Optional

from fastapi import status


class WaashaError(Exception):
    """
    Base class for every error a service can raise.
    The HTTP layer turns these into {"success": false, "message": ...} envelopes
    using the class status code.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(WaashaError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid input."


class DuplicateAccountError(WaashaError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "An account with this email or username already exists."


class InvalidCredentialsError(WaashaError):
    """Raised for unknown email and wrong password alike."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email or password."

    def __init__(self):
        super().__init__()


class InvalidTokenError(WaashaError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid or expired token."

    def __init__(self):
        super().__init__()


class AccountNotFoundError(WaashaError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Account not found."


class InvalidAccountKindError(WaashaError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "This action requires a provider account."


class DuplicateProfileError(WaashaError):
    status_code = status.HTTP_409_CONFLICT
    message = "A provider profile already exists for this account."


class ProfileNotFoundError(WaashaError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Provider profile not found."


class ServiceNotFoundError(WaashaError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Service not found."


class StorageError(WaashaError):
    """Backing store failure. Details go to the server log, never to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "A storage error occurred. Please try again later."

    def __init__(self):
        super().__init__()
