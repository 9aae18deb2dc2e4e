"""
Pytest fixtures and payload builders for bbclone testing.

Payload builders produce JSON shaped like Bitbucket's 2.0 API so decoding is
exercised with realistic data.
"""

import uuid
from collections.abc import Generator
from datetime import datetime, timezone
from typing import Any

import pytest

from bbclone.client import BitbucketClient
from bbclone.testing.mock import FakeBitbucketApi, FakePopen
from bbclone.types.repos import Link, Repository

API_URL = "https://api.bitbucket.org"


# ============================================================================
# Payload Builders
# ============================================================================


def make_repository_payload(
    name: str = "test-repo",
    owner: str = "acme",
    scm: str = "git",
    **overrides: Any,
) -> dict[str, Any]:
    """
    Build a repository object as found in a listing page's ``values``.

    Args:
        name: Repository slug
        owner: Owning account
        scm: "git" or "hg"
        **overrides: Fields to replace or add

    Returns:
        JSON-compatible dict
    """
    user = "git" if scm == "git" else "hg"
    suffix = ".git" if scm == "git" else ""
    payload: dict[str, Any] = {
        "scm": scm,
        "website": None,
        "has_wiki": False,
        "name": name,
        "links": {
            "self": {"href": f"{API_URL}/2.0/repositories/{owner}/{name}"},
            "html": {"href": f"https://bitbucket.org/{owner}/{name}"},
            "clone": [
                {"href": f"https://{owner}@bitbucket.org/{owner}/{name}{suffix}", "name": "https"},
                {"href": f"ssh://{user}@bitbucket.org/{owner}/{name}{suffix}", "name": "ssh"},
            ],
        },
        "fork_policy": "allow_forks",
        "uuid": "{" + str(uuid.uuid5(uuid.NAMESPACE_URL, f"{owner}/{name}")) + "}",
        "language": "python",
        "created_on": "2016-03-01T10:15:30.123456+00:00",
        "full_name": f"{owner}/{name}",
        "has_issues": True,
        "owner": {"username": owner, "type": "team"},
        "updated_on": "2016-04-02T08:00:00.000000+00:00",
        "size": 1024,
        "type": "repository",
        "is_private": False,
        "description": "",
    }
    payload.update(overrides)
    return payload


def make_page_payload(
    repositories: list[dict[str, Any]],
    page: int = 1,
    next_url: str | None = None,
    size: int | None = None,
) -> dict[str, Any]:
    """Build one listing page around the given repository payloads."""
    payload: dict[str, Any] = {
        "pagelen": 10,
        "size": size if size is not None else len(repositories),
        "values": repositories,
        "page": page,
    }
    if next_url is not None:
        payload["next"] = next_url
    return payload


def create_mock_repository(
    name: str = "test-repo",
    owner: str = "acme",
    clone_links: list[Link] | None = None,
    **kwargs: Any,
) -> Repository:
    """
    Create a Repository with customizable fields.

    Args:
        name: Repository slug
        owner: Owning account
        clone_links: Links of the "clone" relation (default: https and ssh git links)
        **kwargs: Additional fields to override

    Returns:
        Repository object
    """
    if clone_links is None:
        clone_links = [
            Link(href=f"https://bitbucket.org/{owner}/{name}.git", name="https"),
            Link(href=f"ssh://git@bitbucket.org/{owner}/{name}.git", name="ssh"),
        ]

    defaults: dict[str, Any] = {
        "scm": "git",
        "website": None,
        "has_wiki": False,
        "links": {"clone": tuple(clone_links)},
        "fork_policy": "allow_forks",
        "uuid": f"{{{name}}}",
        "language": "",
        "created_on": datetime(2016, 3, 1, 10, 15, 30, tzinfo=timezone.utc),
        "full_name": f"{owner}/{name}",
        "has_issues": False,
        "owner": {"username": owner},
        "updated_on": None,
        "size": 0,
        "type": "repository",
        "is_private": False,
        "description": "",
    }
    defaults.update(kwargs)
    return Repository(name=name, **defaults)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def fake_api() -> FakeBitbucketApi:
    """Provide an empty FakeBitbucketApi."""
    return FakeBitbucketApi()


@pytest.fixture
def api_client(fake_api: FakeBitbucketApi) -> Generator[BitbucketClient, None, None]:
    """
    Provide a BitbucketClient whose requests are served by ``fake_api``.

    Example:
        ```python
        def test_listing(fake_api, api_client):
            fake_api.add_page(f"{API_URL}/2.0/repositories/acme", make_page_payload([]))
            assert api_client.repos.list("acme") == []
        ```
    """
    client = BitbucketClient(base_url=API_URL, http_transport=fake_api.as_transport())
    yield client
    client.close()


@pytest.fixture
def fake_popen(monkeypatch: pytest.MonkeyPatch) -> FakePopen:
    """Replace ``subprocess.Popen`` in the dispatcher with a recording fake."""
    popen = FakePopen()
    monkeypatch.setattr("bbclone.git.subprocess.Popen", popen)
    return popen


@pytest.fixture
def sample_repository() -> Repository:
    """Provide a sample git Repository."""
    return create_mock_repository(name="sample-repo")
