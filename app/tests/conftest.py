import sys
from pathlib import Path

import pytest

# Ensure the application package root is on sys.path so importing library
# modules (e.g. `localize`) works during pytest collection regardless of
# where pytest was invoked from.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from infrastructure.logging import configure_logging  # noqa: E402


@pytest.fixture(autouse=True, scope="session")
def suppress_logging():
    """Configure logging once so test output stays quiet."""
    configure_logging()
