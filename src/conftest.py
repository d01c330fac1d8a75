"""Test-run environment.

Set before any test module imports api.security (which requires a JWT
secret) or services.credentials (which reads the bcrypt cost once).
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
