"""Role-conditional signup validation: pick the ruleset for the declared role and validate."""

from typing import Any

from pydantic import ValidationError

from app.core.errors import first_error_message
from app.schemas.auth import (
    BrokerSignupRequest,
    ClaimsSignupRequest,
    InsurerSignupRequest,
    ReinsurerSignupRequest,
    SignupRequest,
    UnderwriterSignupRequest,
    normalize_role,
)

SIGNUP_RULESETS: dict[str, type[SignupRequest]] = {
    "UNDERWRITER": UnderwriterSignupRequest,
    "BROKER": BrokerSignupRequest,
    "INSURER": InsurerSignupRequest,
    "CLAIMS": ClaimsSignupRequest,
    "REINSURER": ReinsurerSignupRequest,
}


class SignupValidationError(Exception):
    """Raised with the first validation message for a signup payload."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def ruleset_for(role: str | None) -> type[SignupRequest]:
    """Schema for the role; unrecognised roles get the base ruleset."""
    return SIGNUP_RULESETS.get(role or "", SignupRequest)


def validate_signup(body: Any) -> SignupRequest:
    """
    Validate a signup payload against the ruleset of its declared role.

    Only the first error is reported. Raises SignupValidationError.
    """
    if not isinstance(body, dict):
        raise SignupValidationError("Request body must be a JSON object")
    role = normalize_role(body.get("role"))
    if role is None:
        raise SignupValidationError("Role required")
    schema = ruleset_for(role)
    try:
        return schema.model_validate(body)
    except ValidationError as e:
        raise SignupValidationError(first_error_message(e.errors())) from e
