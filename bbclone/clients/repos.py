"""Repositories resource client.

Lists every repository of an owner by following the ``next`` cursor of
Bitbucket's paginated ``/2.0/repositories/{owner}`` endpoint.
"""

import re
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from bbclone.exceptions import DecodeError
from bbclone.logging import get_logger
from bbclone.types.repos import Link, RepositoriesPage, Repository

if TYPE_CHECKING:
    from bbclone.transport import HTTPTransport

logger = get_logger()

_MISSING = object()

# YYYY-MM-DDTHH:MM:SS[.fraction](Z|+HH:MM)
_TIMESTAMP_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2})T(\d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?(Z|[+-]\d{2}:\d{2})",
    re.ASCII,
)


def _field(data: dict[str, Any], key: str, kind: type | tuple[type, ...], default: Any = _MISSING) -> Any:
    """Get a field from decoded JSON, checking its type."""
    if key not in data or data[key] is None:
        if default is _MISSING:
            raise DecodeError(f"missing required field '{key}'")
        return default

    value = data[key]
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool) and bool not in (kind if isinstance(kind, tuple) else (kind,)):
        raise DecodeError(f"field '{key}' has unexpected type bool")
    if not isinstance(value, kind):
        raise DecodeError(f"field '{key}' has unexpected type {type(value).__name__}")
    return value


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp with offset; blank strings mean no value."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"timestamp must be a string, got {type(value).__name__}")

    text = value.strip()
    if not text:
        return None

    match = _TIMESTAMP_RE.fullmatch(text)
    if match is None:
        raise DecodeError(f"invalid timestamp '{value}'")

    date, time, fraction, offset = match.groups()
    # fromisoformat on 3.10 only takes 3 or 6 fractional digits
    micros = f".{fraction[:6].ljust(6, '0')}" if fraction else ""
    if offset == "Z":
        offset = "+00:00"

    try:
        return datetime.fromisoformat(f"{date}T{time}{micros}{offset}")
    except ValueError as e:
        raise DecodeError(f"invalid timestamp '{value}'") from e


def _parse_link(data: Any) -> Link:
    if not isinstance(data, dict):
        raise DecodeError(f"link must be an object, got {type(data).__name__}")
    return Link(href=_field(data, "href", str), name=_field(data, "name", str, None))


def _parse_links(data: Any) -> MappingProxyType:
    """
    Parse the ``links`` map of a repository.

    Bitbucket sends a bare object for single-valued relations (e.g. "self")
    and a list for multi-valued ones (e.g. "clone"); both become tuples.
    """
    if not isinstance(data, dict):
        raise DecodeError(f"'links' must be an object, got {type(data).__name__}")

    links: dict[str, tuple[Link, ...]] = {}
    for relation, value in data.items():
        if isinstance(value, list):
            links[relation] = tuple(_parse_link(item) for item in value)
        else:
            links[relation] = (_parse_link(value),)
    return MappingProxyType(links)


def _parse_repository(data: Any) -> Repository:
    """Parse repository data from the snake_case wire format."""
    if not isinstance(data, dict):
        raise DecodeError(f"repository must be an object, got {type(data).__name__}")

    return Repository(
        scm=_field(data, "scm", str),
        website=_field(data, "website", str, None),
        has_wiki=_field(data, "has_wiki", bool, False),
        name=_field(data, "name", str),
        links=_parse_links(data.get("links", {})),
        fork_policy=_field(data, "fork_policy", str, ""),
        uuid=_field(data, "uuid", str),
        language=_field(data, "language", str, ""),
        created_on=_parse_timestamp(data.get("created_on")),
        full_name=_field(data, "full_name", str),
        has_issues=_field(data, "has_issues", bool, False),
        owner=data.get("owner"),
        updated_on=_parse_timestamp(data.get("updated_on")),
        size=_field(data, "size", int, 0),
        type=_field(data, "type", str, "repository"),
        is_private=_field(data, "is_private", bool, False),
        description=_field(data, "description", str, ""),
        parent=data.get("parent"),
    )


def _parse_page(data: dict[str, Any]) -> RepositoriesPage:
    """Parse one page of a repository listing."""
    values = _field(data, "values", list)
    return RepositoriesPage(
        page_length=_field(data, "pagelen", int),
        size=_field(data, "size", int, len(values)),
        repositories=tuple(_parse_repository(repo) for repo in values),
        page=_field(data, "page", int, 1),
        next=_field(data, "next", str, None),
        previous=_field(data, "previous", str, None),
    )


class ReposClient:
    """Client for repository-related operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the repos client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def get_page(self, url: str) -> RepositoriesPage:
        """
        Fetch and decode a single listing page.

        Args:
            url: Page URL, as built by list() or taken from a previous page's ``next``

        Raises:
            TransportError: If the request fails
            DecodeError: If the page does not match the listing schema
        """
        data = self.transport.get_json(url)
        try:
            return _parse_page(data)
        except DecodeError as e:
            raise DecodeError(f"{e.message} (in page {url})") from e

    def list(self, owner: str) -> list[Repository]:
        """
        List all repositories of an owner.

        Pages are requested one after another until a page comes back
        without a ``next`` URL; any failure aborts the whole listing.

        Args:
            owner: Bitbucket account or workspace name

        Returns:
            Repositories in the order the API returned them

        Raises:
            TransportError: If any page request fails
            DecodeError: If any page does not match the listing schema
        """
        repositories: list[Repository] = []
        url: str | None = f"/2.0/repositories/{quote(owner, safe='')}"
        pages = 0

        while url is not None:
            page = self.get_page(url)
            pages += 1
            repositories.extend(page.repositories)
            logger.debug(
                f"page {page.page} of {owner}: {len(page.repositories)} repositories"
            )
            url = page.next

        logger.info(f"found {len(repositories)} repositories of {owner} in {pages} pages")
        return repositories
