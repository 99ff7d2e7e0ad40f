import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop cached settings so environment changes in a test do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
