"""Error types raised by the progress core and the identity provider."""


class WordCardsError(Exception):
    """Base class for application errors."""


class ProgressNotFound(WordCardsError):
    """No progress has been recorded for the account yet."""

    def __init__(self, account_id: str):
        super().__init__(f"No progress recorded for account {account_id}")
        self.account_id = account_id


class InvalidReference(WordCardsError):
    """A word or category id does not match the content catalog."""

    def __init__(self, category_id: int, word_id: int):
        super().__init__(f"Word {word_id} does not belong to category {category_id}")
        self.category_id = category_id
        self.word_id = word_id


class UnknownCategory(WordCardsError):
    """A category id is not present in the content catalog."""

    def __init__(self, category_id: int):
        super().__init__(f"Category {category_id} not found")
        self.category_id = category_id


class StoreUnavailable(WordCardsError):
    """The progress store could not be reached or did not acknowledge a write.

    Safe to retry the whole use-case call.
    """


class IdentityError(WordCardsError):
    """Base class for sign-in and sign-up failures."""


class EmailAlreadyRegistered(IdentityError):
    """An account with this email already exists."""

    def __init__(self, email: str):
        super().__init__(f"Email {email} is already registered")
        self.email = email


class AuthenticationError(IdentityError):
    """Credentials or session token were rejected."""
