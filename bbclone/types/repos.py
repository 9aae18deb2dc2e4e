"""Repository-related data models for the Bitbucket 2.0 API."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from bbclone.exceptions import MissingCloneLinkError


@dataclass(frozen=True)
class Link:
    """A single hyperlink; clone links carry the protocol in ``name``."""

    href: str
    name: str | None = None


@dataclass(frozen=True)
class Repository:
    """Repository information as returned by ``/2.0/repositories/{owner}``."""

    scm: str  # "git" or "hg"
    website: str | None
    has_wiki: bool
    name: str
    links: Mapping[str, tuple[Link, ...]]
    fork_policy: str
    uuid: str
    language: str
    created_on: datetime | None
    full_name: str
    has_issues: bool
    owner: Any
    updated_on: datetime | None
    size: int
    type: str
    is_private: bool
    description: str
    parent: Any = None

    @property
    def clone_links(self) -> tuple[Link, ...]:
        """Links in the "clone" relation, empty if there are none."""
        return self.links.get("clone", ())

    @property
    def ssh_clone_url(self) -> str | None:
        return self.clone_url_for_protocol("ssh")

    def clone_url_for_protocol(self, protocol: str) -> str | None:
        """
        Find the first clone URL using the given protocol.

        Args:
            protocol: URL scheme without the colon (e.g., "ssh", "https")

        Returns:
            The matching href, or None if no clone link uses the protocol
        """
        prefix = f"{protocol}:"
        for link in self.clone_links:
            if link.href.startswith(prefix):
                return link.href
        return None

    def require_ssh_clone_url(self) -> str:
        """
        Get the ssh clone URL, failing if the repository has none.

        Raises:
            MissingCloneLinkError: If no clone link uses ssh
        """
        url = self.ssh_clone_url
        if url is None:
            raise MissingCloneLinkError(self.full_name or self.name, "ssh")
        return url


@dataclass(frozen=True)
class RepositoriesPage:
    """One page of a paginated repository listing."""

    page_length: int
    size: int
    repositories: tuple[Repository, ...] = field(default_factory=tuple)
    page: int = 1
    next: str | None = None
    previous: str | None = None
