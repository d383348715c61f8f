from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from noteshift_core import set_log_handler


@pytest.fixture(autouse=True)
def _reset_log_handler():
    yield
    set_log_handler(None)
