"""
Pytest plugin for bbclone testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["bbclone.testing.conftest"]
"""

from bbclone.testing.fixtures import (
    api_client,
    fake_api,
    fake_popen,
    sample_repository,
)

__all__ = [
    "api_client",
    "fake_api",
    "fake_popen",
    "sample_repository",
]
