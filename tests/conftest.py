"""
Register pytest plugins, fixtures, and hooks to be used during test execution.

Settings are read once at import time, so the environment is prepared here
before any fixture module imports the application.
"""

import os
import sys
from pathlib import Path

THIS_DIR = Path(__file__).parent
TESTS_DIR_PARENT = (THIS_DIR / "..").resolve()

# add the parent directory of tests/ to PYTHONPATH
# so that we can use "from tests.<module> import ..." in our tests and fixtures
sys.path.insert(0, str(TESTS_DIR_PARENT))

os.environ["SECRET_KEY"] = "test-secret-key-with-enough-entropy-1234567890"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["FRONTEND_URL"] = "http://testserver-frontend"
os.environ.pop("GEMINI_API_KEY", None)

pytest_plugins = [
    # Application, database and HTTP client
    "tests.fixtures.app_fixtures",
    # Users, tenants and authenticated headers
    "tests.fixtures.data_fixtures",
]
