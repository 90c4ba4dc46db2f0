import logging
from datetime import datetime

import pytest

from ledgerlog import config

FIXED_NOW = datetime(2025, 6, 1, 12, 0, 0)

LEDGER_ENV_VARS = [
    "LEDGER_LOG_DIR",
    "LEDGER_OUTPUT_DIR",
    "LEDGER_LOG_PATTERN",
    "LEDGER_PARSE_WORKERS",
    "LOG_LEVEL",
]


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def clean_env(monkeypatch):
    for key in LEDGER_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    config.reset_settings_cache()
    yield monkeypatch
    config.reset_settings_cache()


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
