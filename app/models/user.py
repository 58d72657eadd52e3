"""ORM model for platform accounts (auth and role-specific profile fields)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


class User(Base):
    """
    Account created at signup and read on every login/session check.

    role: UNDERWRITER, BROKER, INSURER, CLAIMS or REINSURER. Profile columns
    that the role's signup ruleset does not cover stay NULL.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    username = Column(String(32), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False)

    organization = Column(String(255), nullable=True)
    industry = Column(String(255), nullable=True)
    specialty_line = Column(String(255), nullable=True)
    years_exp = Column(Integer, nullable=True)
    avg_claims_per_month = Column(Integer, nullable=True)
    reinsurer_type = Column(String(32), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
