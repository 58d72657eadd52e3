"""Test environment: in-memory SQLite, cheap bcrypt and a fixed signing secret.

Set before any app module is imported, since settings are read once at import.
"""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-do-not-use-in-production"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("RISK_ASSESSMENT_URL", None)
os.environ["RISK_SERVICE_TOKEN"] = "risk-service-test-token"
