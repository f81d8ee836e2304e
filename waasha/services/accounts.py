import logging
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Union

from sqlmodel import Session, or_, select

from waasha.config import Settings
from waasha.core.exceptions import (
    AccountNotFoundError,
    DuplicateAccountError,
    InvalidCredentialsError,
    InvalidTokenError,
    ValidationError,
)
from waasha.core.security import (
    BCRYPT_MAX_BYTES,
    create_access_token,
    decode_access_token,
    get_password_hash,
    password_too_long,
    verify_password,
)
from waasha.database import commit_or_raise, storage_errors
from waasha.models.user import MAX_ID, Account, AccountKind, AccountRead

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[\d\s\-\+\(\)]{10,}$")


@dataclass
class AuthResult:
    account: AccountRead
    token: str


class AccountService:
    """Registration, login and session token verification."""

    def __init__(self, session: Session, settings: Settings):
        self.session = session
        self.settings = settings

    # =========================
    # REGISTER
    # =========================

    def register(
        self,
        username: str,
        email: str,
        password: str,
        phone_number: Optional[str] = None,
        account_kind: Union[AccountKind, str] = AccountKind.CLIENT,
    ) -> AuthResult:
        username = (username or "").strip()
        email = (email or "").strip()
        phone_number = (phone_number or "").strip() or None

        if not username or not email or not password:
            raise ValidationError("Username, email and password are required.")

        if not EMAIL_RE.match(email):
            raise ValidationError("Please enter a valid email address.")

        if len(password) < self.settings.PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {self.settings.PASSWORD_MIN_LENGTH} characters long."
            )

        if password_too_long(password):
            raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes long.")

        if phone_number is not None and not PHONE_RE.match(phone_number):
            raise ValidationError("Please enter a valid phone number (at least 10 digits).")

        try:
            kind = AccountKind(account_kind)
        except ValueError:
            raise ValidationError("user_type must be one of: Client, Provider.")

        with storage_errors(self.session):
            existing = self.session.exec(
                select(Account).where(or_(Account.email == email, Account.username == username))
            ).first()

        if existing:
            raise DuplicateAccountError()

        account = Account(
            username=username,
            email=email,
            password_hash=get_password_hash(password, self.settings.BCRYPT_ROUNDS),
            phone_number=phone_number,
            user_type=kind,
        )

        self.session.add(account)
        # the unique indexes catch a concurrent registration that slipped past the check
        commit_or_raise(self.session, DuplicateAccountError)
        self.session.refresh(account)

        logger.info("Registered %s account id=%s", kind.value, account.id)

        return self._authenticated(account)

    # =========================
    # LOGIN
    # =========================

    def login(self, email: str, password: str) -> AuthResult:
        email = (email or "").strip()

        with storage_errors(self.session):
            account = self.session.exec(select(Account).where(Account.email == email)).first()

        if not account or not verify_password(password or "", account.password_hash, self.settings.BCRYPT_ROUNDS):
            logger.info("Failed login for %s", email)
            raise InvalidCredentialsError()

        logger.info("Login succeeded for account id=%s", account.id)

        return self._authenticated(account)

    # =========================
    # VERIFY
    # =========================

    def verify(self, token: str) -> AccountRead:
        """
        Validates the token, then reloads the account it names. The claims are
        only trusted to identify the account; everything returned comes from
        the store.
        """
        payload = decode_access_token(token, self.settings.SECRET_KEY, self.settings.ALGORITHM)

        try:
            account_id = int(payload["sub"])
        except (TypeError, ValueError):
            raise InvalidTokenError()

        if not 0 < account_id <= MAX_ID:
            raise InvalidTokenError()

        account = self.get_account(account_id)

        return AccountRead.model_validate(account)

    def get_account(self, account_id: int) -> Account:
        with storage_errors(self.session):
            account = self.session.get(Account, account_id)

        if account is None:
            raise AccountNotFoundError()

        return account

    def issue_token(self, account: Account) -> str:
        return create_access_token(
            data={
                "sub": str(account.id),
                "username": account.username,
                "email": account.email,
                "user_type": AccountKind(account.user_type).value,
            },
            secret_key=self.settings.SECRET_KEY,
            algorithm=self.settings.ALGORITHM,
            expires_delta=timedelta(days=self.settings.ACCESS_TOKEN_EXPIRE_DAYS),
        )

    def _authenticated(self, account: Account) -> AuthResult:
        return AuthResult(account=AccountRead.model_validate(account), token=self.issue_token(account))
