"""Test-wide environment defaults.

api.security refuses to import without a signing key, so these must be
set before any test module imports the app.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("JWT_ISSUER", "provider-registry")
os.environ.setdefault("JWT_AUDIENCE", "provider-registry-clients")
os.environ.setdefault("DATABASE_URL", "sqlite://")
