"""
Credential handling for Bitbucket requests.

Credentials are turned into an ``httpx.Auth`` once, when the transport is
built. ``httpx.BasicAuth`` writes the Authorization header on the first
request, so no unauthenticated round trip is made.
"""

import getpass
import sys
from dataclasses import dataclass, field
from typing import TextIO

import httpx

from bbclone.exceptions import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    """Bitbucket login and password (or app password)."""

    login: str
    password: str = field(repr=False)

    def to_auth(self) -> httpx.Auth:
        """Build a preemptive basic-auth handler for these credentials."""
        return httpx.BasicAuth(self.login, self.password)


def build_auth(credentials: Credentials | None) -> httpx.Auth | None:
    """Map optional credentials to the transport's auth option."""
    if credentials is None:
        return None
    return credentials.to_auth()


def resolve_credentials(
    login: str,
    password: str | None = None,
    stdin: TextIO | None = None,
) -> Credentials:
    """
    Resolve credentials, prompting for the password if it was not given.

    Args:
        login: Bitbucket login
        password: Password from the command line, if any
        stdin: Stream checked for an attached terminal (default: sys.stdin)

    Returns:
        Credentials for the login

    Raises:
        ConfigurationError: If a prompt is needed but no terminal is attached
    """
    if password is not None:
        return Credentials(login, password)

    stream = stdin if stdin is not None else sys.stdin
    if stream is None or not stream.isatty():
        raise ConfigurationError("no console available: give password on command line")

    return Credentials(login, getpass.getpass("password: "))
