"""bbclone resource clients."""

from bbclone.clients.repos import ReposClient

__all__ = [
    "ReposClient",
]
