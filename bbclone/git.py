"""
Clone helpers for bbclone.

Runs ``git`` or ``hg`` to clone each discovered repository, one at a time,
forwarding the tool's output to our stdout while it runs.
"""

import subprocess
import sys
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import IO, BinaryIO, cast

from bbclone.exceptions import CloneFailedError, MissingCloneLinkError, UnsupportedUrlError
from bbclone.logging import get_logger, log_clone_command
from bbclone.types.repos import Repository

logger = get_logger("git")

# Scheme prefix -> version-control tool
CLONE_TOOLS: dict[str, str] = {
    "ssh://git@": "git",
    "ssh://hg@": "hg",
}


class CloneState(Enum):
    """Progress of a single repository through the dispatcher."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class CloneResult:
    """Outcome of cloning one repository."""

    name: str
    url: str | None
    state: CloneState = CloneState.NOT_STARTED
    exit_code: int | None = None


def clone_command(url: str) -> list[str]:
    """
    Select the clone command line for a URL.

    Args:
        url: Repository clone URL

    Returns:
        Command line for ``subprocess``

    Raises:
        UnsupportedUrlError: If no tool handles the URL's scheme
    """
    for prefix, tool in CLONE_TOOLS.items():
        if url.startswith(prefix):
            return [tool, "clone", "--quiet", url]
    raise UnsupportedUrlError(url)


class _OutputForwarder(threading.Thread):
    """Copies a child's output to a sink until EOF.

    A failing sink does not stop the draining, so the child never blocks on
    a full pipe; the first write error is kept in ``error``.
    """

    def __init__(self, source: BinaryIO, sink: IO[bytes]) -> None:
        super().__init__(daemon=True)
        self.source = source
        self.sink = sink
        self.error: OSError | None = None

    def run(self) -> None:
        for chunk in iter(lambda: self.source.read1(8192), b""):
            if self.error is not None:
                continue
            try:
                self.sink.write(chunk)
                self.sink.flush()
            except OSError as e:
                self.error = e


class CloneDispatcher:
    """
    Clones repositories with the tool matching each clone URL.

    Example:
        ```python
        from bbclone import find_repositories
        from bbclone.git import CloneDispatcher

        dispatcher = CloneDispatcher()
        dispatcher.clone_all(find_repositories("acme"), "./acme")
        ```
    """

    def __init__(self, output: IO[bytes] | None = None) -> None:
        """
        Initialize the dispatcher.

        Args:
            output: Binary stream receiving clone output (default: sys.stdout.buffer)
        """
        self._output = output
        self.results: list[CloneResult] = []

    @property
    def output(self) -> IO[bytes]:
        if self._output is not None:
            return self._output
        return sys.stdout.buffer

    def clone(self, url: str, target_dir: str | Path) -> None:
        """
        Clone a repository into a subdirectory of target_dir.

        Blocks until the clone process exits.

        Args:
            url: Repository clone URL (ssh://git@... or ssh://hg@...)
            target_dir: Directory the clone is created in

        Raises:
            UnsupportedUrlError: If the URL scheme is not supported (nothing is run)
            CloneFailedError: If the clone process exits with a nonzero status
            OSError: If the clone output could not be written to the output stream
        """
        target_dir = Path(target_dir)
        cmd = clone_command(url)
        log_clone_command(cmd, str(target_dir))
        self.output.flush()

        process = subprocess.Popen(
            cmd,
            cwd=target_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
        stdout = cast(BinaryIO, process.stdout)

        forwarder = _OutputForwarder(stdout, self.output)
        forwarder.start()

        exit_code = process.wait()
        forwarder.join()
        stdout.close()

        if forwarder.error is not None:
            raise forwarder.error

        if exit_code != 0:
            raise CloneFailedError(url, target_dir, exit_code)

    def clone_all(self, repositories: Iterable[Repository], target_dir: str | Path) -> list[CloneResult]:
        """
        Clone repositories one after another via their ssh clone links.

        The first failure stops the run; later repositories stay NOT_STARTED.

        Args:
            repositories: Repositories to clone, in order
            target_dir: Directory each repository is cloned into

        Returns:
            One result per repository, all SUCCEEDED

        Raises:
            MissingCloneLinkError: If a repository has no ssh clone link
            UnsupportedUrlError: If an ssh link uses an unknown user
            CloneFailedError: If a clone process fails
            OSError: If clone output could not be written
        """
        pending = list(repositories)
        self.results = [CloneResult(name=repo.name, url=repo.ssh_clone_url) for repo in pending]

        for repo, result in zip(pending, self.results):
            try:
                url = repo.require_ssh_clone_url()
            except MissingCloneLinkError:
                result.state = CloneState.FAILED
                raise

            result.state = CloneState.RUNNING
            try:
                self.output.write(f"{repo.name} - {url}\n".encode())
                self.clone(url, target_dir)
            except CloneFailedError as e:
                result.state = CloneState.FAILED
                result.exit_code = e.exit_code
                raise
            except (UnsupportedUrlError, OSError):
                result.state = CloneState.FAILED
                raise

            result.state = CloneState.SUCCEEDED
            logger.info(f"cloned {repo.full_name} into {target_dir}")
            result.exit_code = 0

        return self.results
