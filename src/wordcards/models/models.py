"""Database models for accounts and learning progress."""
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    String,
)
from sqlalchemy.orm import relationship

from wordcards.models.base import Base, TimestampMixin


class Account(Base, TimestampMixin):
    """Registered learner."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, nullable=False, index=True)
    username = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)

    # Relationships
    sessions = relationship("AccountSession", back_populates="account")


class AccountSession(Base, TimestampMixin):
    """Sign-in session handed to clients as an opaque token."""

    __tablename__ = "account_sessions"

    token = Column(String, primary_key=True)
    account_id = Column(String, ForeignKey("accounts.id"), nullable=False, index=True)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    account = relationship("Account", back_populates="sessions")


# Progress rows reference accounts by opaque id only, no foreign key to accounts
class AccountProgress(Base, TimestampMixin):
    """Account-level totals."""

    __tablename__ = "account_progress"

    account_id = Column(String, primary_key=True)
    studied_days = Column(Integer, nullable=False, default=0)
    last_study_date = Column(Date, nullable=True)
    total_words = Column(Integer, nullable=False, default=0)


class CategoryProgress(Base, TimestampMixin):
    """Per-category completion for one account."""

    __tablename__ = "category_progress"

    account_id = Column(String, primary_key=True)
    category_id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, default="")
    progress = Column(Integer, nullable=False, default=0)  # 0-100

    # Relationships
    words = relationship(
        "WordProgress",
        back_populates="category",
        order_by="WordProgress.word_id",
    )


class WordProgress(Base, TimestampMixin):
    """Learning state of one word for one account."""

    __tablename__ = "word_progress"
    __table_args__ = (
        ForeignKeyConstraint(
            ["account_id", "category_id"],
            ["category_progress.account_id", "category_progress.category_id"],
        ),
    )

    account_id = Column(String, primary_key=True)
    category_id = Column(Integer, primary_key=True)
    word_id = Column(Integer, primary_key=True)
    learned = Column(Boolean, nullable=False, default=True)
    review_count = Column(Integer, nullable=False, default=1)
    last_review_date = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    category = relationship("CategoryProgress", back_populates="words")
