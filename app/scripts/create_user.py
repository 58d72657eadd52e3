"""
Create an account from the command line, applying the same role rulesets as signup.
Run from project root:
  python -m app.scripts.create_user EMAIL USERNAME PASSWORD ROLE --full-name "Full Name" [role fields]
Example:
  python -m app.scripts.create_user jane@acme.co.ke jane Secret123 BROKER --full-name "Jane Doe" --organization "Acme Insurance"
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.logging import configure_logging
from app.services.accounts import AccountError, create_account
from app.services.signup import SignupValidationError, validate_signup

# CLI flag dest -> signup JSON key.
ROLE_FIELD_OPTIONS = {
    "organization": "organization",
    "industry": "industry",
    "specialty_line": "specialtyLine",
    "years_exp": "yearsExp",
    "avg_claims_per_month": "avgClaimsPerMonth",
    "reinsurer_type": "reinsurerType",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an InsurMap account.")
    parser.add_argument("email")
    parser.add_argument("username", help="3-32 chars: letters, numbers, dot, underscore, hyphen")
    parser.add_argument("password", help="8+ chars with upper, lower and a digit")
    parser.add_argument("role", help="UNDERWRITER, BROKER, INSURER, CLAIMS or REINSURER")
    parser.add_argument("--full-name", required=True)
    for dest in ROLE_FIELD_OPTIONS:
        parser.add_argument("--" + dest.replace("_", "-"), dest=dest, default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(get_settings().LOG_LEVEL)
    args = build_parser().parse_args(argv)

    body = {
        "email": args.email,
        "username": args.username,
        "password": args.password,
        "role": args.role,
        "fullName": args.full_name,
    }
    for dest, key in ROLE_FIELD_OPTIONS.items():
        value = getattr(args, dest)
        if value is not None:
            body[key] = value

    try:
        signup = validate_signup(body)
    except SignupValidationError as e:
        print(e.message, file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = create_account(db, signup)
    except AccountError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' ({user.email}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
