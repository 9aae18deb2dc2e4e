"""bbclone exception classes."""

from pathlib import Path


class BbCloneError(Exception):
    """Base exception for all bbclone errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(BbCloneError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class TransportError(BbCloneError):
    """Raised when a request fails or returns a non-2xx status."""

    def __init__(
        self, code: str, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(code, message)
        self.status_code = status_code


class AuthenticationError(TransportError):
    """Raised when Bitbucket rejects the credentials (401)."""

    pass


class AuthorizationError(TransportError):
    """Raised when access to the account is denied (403)."""

    pass


class NotFoundError(TransportError):
    """Raised when the owner does not exist (404)."""

    pass


class ServerError(TransportError):
    """Raised on server errors (5xx)."""

    pass


class DecodeError(BbCloneError):
    """Raised when a response body does not match the expected schema."""

    def __init__(self, message: str) -> None:
        super().__init__("DECODE_ERROR", message)


class UnsupportedUrlError(BbCloneError):
    """Raised when no clone tool handles a URL's scheme."""

    def __init__(self, url: str) -> None:
        super().__init__("UNSUPPORTED_URL", f"unsupported url: {url}")
        self.url = url


class CloneFailedError(BbCloneError):
    """Raised when a clone process exits with a nonzero status."""

    def __init__(self, url: str, target_dir: Path, exit_code: int) -> None:
        super().__init__(
            "CLONE_FAILED",
            f"failed to clone {url} to {target_dir}: exit code {exit_code}",
        )
        self.url = url
        self.target_dir = target_dir
        self.exit_code = exit_code


class MissingCloneLinkError(BbCloneError):
    """Raised when a repository has no clone link for the wanted protocol."""

    def __init__(self, repository: str, protocol: str) -> None:
        super().__init__(
            "MISSING_CLONE_LINK",
            f"repository {repository} has no {protocol} clone link",
        )
        self.repository = repository
        self.protocol = protocol
