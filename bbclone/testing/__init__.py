"""bbclone testing utilities.

Provides fakes and payload builders for testing code that uses bbclone.
"""

from bbclone.testing.fixtures import (
    create_mock_repository,
    make_page_payload,
    make_repository_payload,
)
from bbclone.testing.mock import FakeBitbucketApi, FakePopen, FakeProcess, MockCall

__all__ = [
    # Fakes
    "FakeBitbucketApi",
    "FakePopen",
    "FakeProcess",
    "MockCall",
    # Helper functions
    "create_mock_repository",
    "make_page_payload",
    "make_repository_payload",
]
