"""bbclone type definitions.

This module exports the data model types decoded from the Bitbucket API.
"""

from bbclone.types.repos import Link, RepositoriesPage, Repository

__all__ = [
    "Link",
    "Repository",
    "RepositoriesPage",
]
