"""bbclone - clone every repository of a Bitbucket account."""

from bbclone.auth import Credentials, resolve_credentials
from bbclone.client import BitbucketClient, find_repositories
from bbclone.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BbCloneError,
    CloneFailedError,
    ConfigurationError,
    DecodeError,
    MissingCloneLinkError,
    NotFoundError,
    ServerError,
    TransportError,
    UnsupportedUrlError,
)
from bbclone.git import CloneDispatcher, CloneResult, CloneState, clone_command
from bbclone.logging import configure_logging, get_logger
from bbclone.transport import HTTPTransport
from bbclone.types import Link, RepositoriesPage, Repository

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Client
    "BitbucketClient",
    "find_repositories",
    # Credentials
    "Credentials",
    "resolve_credentials",
    # Cloning
    "CloneDispatcher",
    "CloneResult",
    "CloneState",
    "clone_command",
    # Types
    "Link",
    "Repository",
    "RepositoriesPage",
    # Exceptions
    "BbCloneError",
    "ConfigurationError",
    "TransportError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ServerError",
    "DecodeError",
    "UnsupportedUrlError",
    "CloneFailedError",
    "MissingCloneLinkError",
    # Transport
    "HTTPTransport",
    # Logging
    "configure_logging",
    "get_logger",
]
