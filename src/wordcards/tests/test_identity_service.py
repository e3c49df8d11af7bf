"""Tests for the identity service."""
import pytest
from faker import Faker
from sqlalchemy.orm import Session

from wordcards.exceptions import AuthenticationError, EmailAlreadyRegistered, IdentityError
from wordcards.models.models import Account
from wordcards.services.identity_service import IdentityService, hash_password, verify_password

fake = Faker()


@pytest.fixture
def identity_service(db: Session) -> IdentityService:
    return IdentityService(db)


def test_password_hashing() -> None:
    hashed = hash_password("secret-password")

    assert hashed != "secret-password"
    assert verify_password("secret-password", hashed)
    assert not verify_password("other-password", hashed)


def test_sign_up(identity_service: IdentityService, db: Session) -> None:
    """Test account creation with an open session."""
    email = fake.email()
    account = identity_service.sign_up(email, "password123", "learner")

    assert account.email == email.lower()
    assert account.username == "learner"
    assert account.token
    assert identity_service.is_session_active(account.token)

    stored = db.get(Account, account.account_id)
    assert stored.password_hash != "password123"


def test_sign_up_defaults_username_to_email_name(identity_service: IdentityService) -> None:
    account = identity_service.sign_up("Mei.Ling@example.com", "password123")
    assert account.username == "mei.ling"


def test_sign_up_duplicate_email(identity_service: IdentityService) -> None:
    email = fake.email()
    identity_service.sign_up(email, "password123")

    with pytest.raises(EmailAlreadyRegistered):
        identity_service.sign_up(email.upper(), "password456")


def test_sign_up_validation(identity_service: IdentityService) -> None:
    with pytest.raises(IdentityError):
        identity_service.sign_up("not-an-email", "password123")
    with pytest.raises(IdentityError):
        identity_service.sign_up(fake.email(), "123")


def test_sign_in(identity_service: IdentityService) -> None:
    """Test that sign-in returns the same account with a fresh token."""
    email = fake.email()
    created = identity_service.sign_up(email, "password123", "learner")

    signed_in = identity_service.sign_in(email, "password123")

    assert signed_in.account_id == created.account_id
    assert signed_in.token != created.token
    assert identity_service.get_current_account(signed_in.token).account_id == created.account_id


def test_sign_in_rejects_bad_credentials(identity_service: IdentityService) -> None:
    email = fake.email()
    identity_service.sign_up(email, "password123")

    with pytest.raises(AuthenticationError):
        identity_service.sign_in(email, "wrong-password")
    with pytest.raises(AuthenticationError):
        identity_service.sign_in(fake.email(), "password123")


def test_sign_out(identity_service: IdentityService) -> None:
    """Test that a revoked session no longer resolves to an account."""
    account = identity_service.sign_up(fake.email(), "password123")

    identity_service.sign_out(account.token)

    assert identity_service.get_current_account(account.token) is None
    assert not identity_service.is_session_active(account.token)
    identity_service.sign_out(account.token)  # Second sign-out is a no-op


def test_unknown_token(identity_service: IdentityService) -> None:
    assert identity_service.get_current_account(None) is None
    assert identity_service.get_current_account("missing") is None
