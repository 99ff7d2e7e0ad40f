import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

# Default settings for tests; explicit environment values win.
os.environ.setdefault("SECRET_KEY", "x" * 32)
os.environ.setdefault("BASE_URL", "http://testserver")
os.environ.setdefault("ALLOWED_ORIGINS", "http://example.com")

# Importing api.app.main configures the root logger at import time; remember
# the pristine level so that side effect does not leak across tests.
_ROOT_LOG_LEVEL = logging.getLogger().level

import api.app.db as app_db  # noqa: E402
import pytest  # noqa: E402

# Every test shares one in-memory SQLite database instead of the on-disk
# default from config.json.
app_db.SessionLocal, app_db.engine = app_db.create_test_session()


@pytest.fixture(autouse=True)
def _reset_root_log_level():
    logging.getLogger().setLevel(_ROOT_LOG_LEVEL)
    yield
