"""Root test configuration: isolate tests from HTMLVEGA_* settings in the environment"""

import os

import pytest


@pytest.fixture(autouse=True)
def clear_htmlvega_env(monkeypatch):
    """Drop HTMLVEGA_<FIELD> env vars so load_config only sees what a test sets."""
    for name in list(os.environ):
        if name.startswith("HTMLVEGA_"):
            monkeypatch.delenv(name, raising=False)
