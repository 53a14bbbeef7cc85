"""
Shared pytest fixtures.

Every test starts from a clean process-wide configuration: the MIPSINSN_*
environment variables are removed and the cached Config is dropped, so
settings changed by one test never leak into the next.
"""

import pytest

from mipsinsn.config import set_config

ENV_VARS = ("MIPSINSN_GPR_ABI", "MIPSINSN_FPR_ABI", "MIPSINSN_PSEUDOS", "MIPSINSN_CATEGORY")


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Reset the process-wide configuration around each test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_config(None)
    yield
    set_config(None)
