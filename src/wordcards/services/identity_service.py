"""Local identity provider: accounts, passwords and sign-in sessions."""
import logging
import secrets
import uuid
from datetime import UTC, datetime
from typing import Optional

from pwdlib import PasswordHash
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wordcards.config import settings
from wordcards.exceptions import AuthenticationError, EmailAlreadyRegistered, IdentityError
from wordcards.models.models import Account, AccountSession
from wordcards.models.progress_models import AccountContext
from wordcards.monitoring import accounts_registered

logger = logging.getLogger(__name__)

password_hash = PasswordHash.recommended()


def hash_password(plain_password: str) -> str:
    """Hash a plain password for storage with pepper."""
    return password_hash.hash(plain_password + settings.identity.password_pepper)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored hash."""
    return password_hash.verify(plain_password + settings.identity.password_pepper, hashed_password)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityService:
    """Sign-up, sign-in and session lookup."""

    def __init__(self, db: Session):
        """Initialize the service with a database session."""
        self.db = db

    def get_account_by_email(self, email: str) -> Optional[Account]:
        return self.db.query(Account).filter(Account.email == normalize_email(email)).first()

    def sign_up(self, email: str, password: str, username: Optional[str] = None) -> AccountContext:
        """Create an account and open a session for it.

        Raises:
            EmailAlreadyRegistered: the email is taken.
            IdentityError: the email or password is not acceptable.
        """
        email = normalize_email(email)
        if "@" not in email:
            raise IdentityError(f"Invalid email address: {email}")
        if len(password) < settings.identity.min_password_length:
            raise IdentityError(
                f"Password must be at least {settings.identity.min_password_length} characters"
            )
        if self.get_account_by_email(email):
            raise EmailAlreadyRegistered(email)

        account = Account(
            id=str(uuid.uuid4()),
            email=email,
            username=username or email.split("@")[0],
            password_hash=hash_password(password),
        )
        self.db.add(account)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise EmailAlreadyRegistered(email) from e

        accounts_registered.inc()
        logger.info(f"Account created: {account.id} ({account.username})")
        return self._open_session(account)

    def sign_in(self, email: str, password: str) -> AccountContext:
        """Check credentials and open a new session.

        Raises:
            AuthenticationError: unknown email or wrong password.
        """
        account = self.get_account_by_email(email)
        if account is None or not verify_password(password, account.password_hash):
            logger.warning(f"Failed sign-in for {normalize_email(email)}")
            raise AuthenticationError("Invalid email or password")
        return self._open_session(account)

    def sign_out(self, token: str) -> None:
        """Revoke a session. Unknown or already revoked tokens are ignored."""
        session = self.db.get(AccountSession, token)
        if session is None or session.revoked_at is not None:
            return
        session.revoked_at = datetime.now(UTC)
        self.db.commit()
        logger.info(f"Account {session.account_id} signed out")

    def get_current_account(self, token: Optional[str]) -> Optional[AccountContext]:
        """Get the account behind an active session token."""
        if not token:
            return None
        session = self.db.get(AccountSession, token)
        if session is None or session.revoked_at is not None:
            return None
        account = session.account
        return AccountContext(
            account_id=account.id,
            email=account.email,
            username=account.username,
            token=token,
        )

    def is_session_active(self, token: Optional[str]) -> bool:
        return self.get_current_account(token) is not None

    def _open_session(self, account: Account) -> AccountContext:
        token = secrets.token_urlsafe(32)
        self.db.add(AccountSession(token=token, account_id=account.id))
        self.db.commit()
        logger.debug(f"Session opened for account {account.id}")
        return AccountContext(
            account_id=account.id,
            email=account.email,
            username=account.username,
            token=token,
        )
