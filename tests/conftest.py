"""Shared fixtures for the bbclone test suite."""

from bbclone.testing.fixtures import (  # noqa: F401
    api_client,
    fake_api,
    fake_popen,
    sample_repository,
)
