"""Request/response schemas for auth endpoints, including the per-role signup rulesets."""

import re
from typing import Any, Literal

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.core.errors import FIELD_MESSAGE
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)

Role = Literal["UNDERWRITER", "BROKER", "INSURER", "CLAIMS", "REINSURER"]

ROLE_VALUES: frozenset[str] = frozenset(
    {"UNDERWRITER", "BROKER", "INSURER", "CLAIMS", "REINSURER"}
)

ROLE_ALIASES = {"CLAIMS_HANDLER": "CLAIMS"}

REINSURER_TYPES: frozenset[str] = frozenset({"treaty", "facultative"})

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+$")


def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError(FIELD_MESSAGE, message)


def normalize_role(value: Any) -> str | None:
    """Canonical role tag (e.g. 'claims-handler' -> 'CLAIMS'); None when absent."""
    if value is None or not isinstance(value, str) or not value.strip():
        return None
    tag = re.sub(r"[\s-]+", "_", value.strip()).upper()
    return ROLE_ALIASES.get(tag, tag)


def _required_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise _fail(message)
    return value.strip()


def _non_negative_int(value: Any, message: str) -> int:
    if isinstance(value, bool):
        raise _fail(message)
    if isinstance(value, str):
        value = value.strip()
        # Whole numbers may arrive as "6" or "6.0" from form fields.
        if not re.fullmatch(r"\d+(?:\.0*)?", value):
            raise _fail(message)
        return int(value.split(".")[0])
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 0:
        raise _fail(message)
    return value


class SignupRequest(BaseModel):
    """Fields common to every role. Unknown keys are ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    full_name: str
    email: str
    username: str
    password: str
    role: Role

    @field_validator("full_name", mode="before")
    @classmethod
    def validate_full_name(cls, v: Any) -> str:
        name = _required_text(v, "Enter your full name")
        if len(name) < 2:
            raise _fail("Enter your full name")
        return name

    @field_validator("email", mode="before")
    @classmethod
    def validate_email_address(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise _fail("Invalid email")
        try:
            result = validate_email(v.strip(), check_deliverability=False)
        except EmailNotValidError:
            raise _fail("Invalid email") from None
        return result.normalized.lower()

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v: Any) -> str:
        if not isinstance(v, str) or len(v.strip()) < USERNAME_MIN_LEN:
            raise _fail(f"Username must be at least {USERNAME_MIN_LEN} characters")
        username = v.strip()
        if len(username) > USERNAME_MAX_LEN:
            raise _fail(f"Username must be at most {USERNAME_MAX_LEN} characters")
        if not USERNAME_PATTERN.match(username):
            raise _fail("Only letters, numbers, dot, underscore, hyphen")
        return username

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v: Any) -> str:
        if not isinstance(v, str) or len(v) < PASSWORD_MIN_LEN:
            raise _fail(f"Password must be at least {PASSWORD_MIN_LEN} characters")
        if len(v) > PASSWORD_MAX_LEN:
            raise _fail(f"Password must be at most {PASSWORD_MAX_LEN} characters")
        if not re.search(r"[A-Z]", v):
            raise _fail("Must include an uppercase letter")
        if not re.search(r"[a-z]", v):
            raise _fail("Must include a lowercase letter")
        if not re.search(r"[0-9]", v):
            raise _fail("Must include a number")
        return v

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v: Any) -> str:
        role = normalize_role(v)
        if role not in ROLE_VALUES:
            raise _fail("Invalid role")
        return role

    def profile_fields(self) -> dict[str, Any]:
        """Role-specific columns for the user row; the base ruleset has none."""
        return {}


class UnderwriterSignupRequest(SignupRequest):
    specialty_line: str
    years_exp: int

    @field_validator("specialty_line", mode="before")
    @classmethod
    def validate_specialty_line(cls, v: Any) -> str:
        return _required_text(v, "Select your specialty")

    @field_validator("years_exp", mode="before")
    @classmethod
    def validate_years_exp(cls, v: Any) -> int:
        return _non_negative_int(v, "Years of experience must be a whole number of 0 or more")

    def profile_fields(self) -> dict[str, Any]:
        return {"specialty_line": self.specialty_line, "years_exp": self.years_exp}


class BrokerSignupRequest(SignupRequest):
    organization: str

    @field_validator("organization", mode="before")
    @classmethod
    def validate_organization(cls, v: Any) -> str:
        return _required_text(v, "Enter organization")

    def profile_fields(self) -> dict[str, Any]:
        return {"organization": self.organization}


class InsurerSignupRequest(SignupRequest):
    organization: str
    industry: str | None = None

    @field_validator("organization", mode="before")
    @classmethod
    def validate_organization(cls, v: Any) -> str:
        return _required_text(v, "Enter company name")

    @field_validator("industry", mode="before")
    @classmethod
    def blank_industry_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    def profile_fields(self) -> dict[str, Any]:
        return {"organization": self.organization, "industry": self.industry}


class ClaimsSignupRequest(SignupRequest):
    organization: str
    avg_claims_per_month: int

    @field_validator("organization", mode="before")
    @classmethod
    def validate_organization(cls, v: Any) -> str:
        return _required_text(v, "Enter organization")

    @field_validator("avg_claims_per_month", mode="before")
    @classmethod
    def validate_avg_claims(cls, v: Any) -> int:
        return _non_negative_int(v, "Average claims per month must be a whole number of 0 or more")

    def profile_fields(self) -> dict[str, Any]:
        return {
            "organization": self.organization,
            "avg_claims_per_month": self.avg_claims_per_month,
        }


class ReinsurerSignupRequest(SignupRequest):
    organization: str
    reinsurer_type: str

    @field_validator("organization", mode="before")
    @classmethod
    def validate_organization(cls, v: Any) -> str:
        return _required_text(v, "Enter reinsurer")

    @field_validator("reinsurer_type", mode="before")
    @classmethod
    def validate_reinsurer_type(cls, v: Any) -> str:
        if not isinstance(v, str) or v.strip().lower() not in REINSURER_TYPES:
            raise _fail("Invalid reinsurer type")
        return v.strip().lower()

    def profile_fields(self) -> dict[str, Any]:
        return {
            "organization": self.organization,
            "reinsurer_type": self.reinsurer_type,
        }


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., max_length=320, description="Account email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v


class UserOut(BaseModel):
    """Public view of an account (no password hash, no profile details)."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    email: str
    username: str
    full_name: str
    role: str


class UserResponse(BaseModel):
    """Response body for signup, login and /auth/me."""

    user: UserOut


class MessageResponse(BaseModel):
    message: str


class CurrentUser(BaseModel):
    """Authenticated user (id, email, username, role) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str
    full_name: str
    role: str
