"""Root test configuration: keep LITWEAVE_* environment variables out of every test"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove LITWEAVE_* env vars so settings only come from what a test sets."""
    for name in list(os.environ):
        if name.startswith("LITWEAVE_"):
            monkeypatch.delenv(name)
