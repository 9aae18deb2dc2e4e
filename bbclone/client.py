"""
bbclone main client.

Provides the primary interface for reading repository listings from the
Bitbucket Cloud API.
"""

import os
from typing import Any

import httpx

from bbclone.auth import Credentials
from bbclone.clients import ReposClient
from bbclone.exceptions import ConfigurationError
from bbclone.transport import HTTPTransport
from bbclone.types.repos import Repository


class BitbucketClient:
    """
    Main client for interacting with the Bitbucket API.

    Example:
        ```python
        from bbclone import BitbucketClient, Credentials

        with BitbucketClient(credentials=Credentials("me", "app-password")) as client:
            for repo in client.repos.list("acme"):
                print(repo.full_name, repo.ssh_clone_url)

        # Or create from environment variables
        client = BitbucketClient.from_env()
        ```
    """

    DEFAULT_BASE_URL = "https://api.bitbucket.org"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        credentials: Credentials | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the Bitbucket client.

        Args:
            credentials: Login and password for preemptive basic auth, or None
            base_url: Base URL for API requests (default: https://api.bitbucket.org)
            timeout: Request timeout in seconds (default: 30.0)
            http_transport: httpx transport override, mainly for tests
        """
        self.credentials = credentials
        self.base_url = base_url
        self.timeout = timeout

        self._transport = HTTPTransport(
            base_url=base_url,
            credentials=credentials,
            timeout=timeout,
            http_transport=http_transport,
        )

        self.repos = ReposClient(self._transport)

    @classmethod
    def from_env(
        cls,
        credentials: Credentials | None = None,
    ) -> "BitbucketClient":
        """
        Create a client from environment variables.

        Environment variables:
            BITBUCKET_API_URL: Base URL for API (optional, default: https://api.bitbucket.org)
            BITBUCKET_LOGIN: Login for basic auth (optional, requires BITBUCKET_PASSWORD)
            BITBUCKET_PASSWORD: Password or app password (optional, requires BITBUCKET_LOGIN)
            BITBUCKET_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Args:
            credentials: Explicit credentials; these win over BITBUCKET_LOGIN/PASSWORD

        Returns:
            Configured BitbucketClient instance

        Raises:
            ConfigurationError: If the environment is inconsistent or malformed
        """
        base_url = os.environ.get("BITBUCKET_API_URL", cls.DEFAULT_BASE_URL)
        login = os.environ.get("BITBUCKET_LOGIN")
        password = os.environ.get("BITBUCKET_PASSWORD")
        timeout_str = os.environ.get("BITBUCKET_TIMEOUT")

        if credentials is None and (login or password):
            if not login:
                raise ConfigurationError("BITBUCKET_PASSWORD is set but BITBUCKET_LOGIN is not")
            if not password:
                raise ConfigurationError("BITBUCKET_LOGIN is set but BITBUCKET_PASSWORD is not")
            credentials = Credentials(login, password)

        timeout = cls.DEFAULT_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid BITBUCKET_TIMEOUT: {timeout_str}. Must be a number of seconds"
                ) from None

        return cls(credentials=credentials, base_url=base_url, timeout=timeout)

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "BitbucketClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()


def find_repositories(
    owner: str,
    credentials: Credentials | None = None,
    base_url: str = BitbucketClient.DEFAULT_BASE_URL,
) -> list[Repository]:
    """
    List every repository of an owner in a single blocking call.

    Args:
        owner: Bitbucket account or workspace name
        credentials: Optional credentials for private repositories
        base_url: Base URL for API requests

    Returns:
        All repositories, in listing order

    Raises:
        TransportError: If any page request fails
        DecodeError: If any page is malformed
    """
    with BitbucketClient(credentials=credentials, base_url=base_url) as client:
        return client.repos.list(owner)
