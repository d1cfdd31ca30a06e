"""Module that implements the file explorer on top of a remote shell and SFTP."""

from typing import List, Optional

from sshexplorer.constants import DEFAULT_TIMEOUT
from sshexplorer.filesystem.commands import execute, execute_only
from sshexplorer.filesystem.common import (
    Credentials,
    DirectoryEntry,
    normalize_path,
    SessionError,
)
from sshexplorer.filesystem.explorer import FileExplorer
from sshexplorer.filesystem.listing import parse_listing
from sshexplorer.filesystem.transfer import ContentTransfer
from sshexplorer.filesystem.transport import TransportSession


class SSHFileExplorer(FileExplorer):
    """
    File explorer for a host that is only reachable over SSH.

    Structural operations are executed as shell commands and file contents are moved
    over SFTP. None of the operations are idempotent, e.g. deleting a path twice fails
    the second time because rm can't find it anymore.
    """

    def __init__(
        self,
        credentials: Credentials,
        timeout: float = DEFAULT_TIMEOUT,
        staging_dir: Optional[str] = None,
    ):
        """Instantiate without connecting yet, see init()."""
        self.credentials = credentials
        self._timeout = timeout
        self._transfer = ContentTransfer(staging_dir)
        self._session: Optional[TransportSession] = None

    def init(self) -> None:
        if self._session is not None:
            raise SessionError("session is already initialized")

        self._session = TransportSession.open(self.credentials, self._timeout)

    @property
    def session(self) -> TransportSession:
        if self._session is None or not self._session.is_open:
            raise SessionError("session is not open")

        return self._session

    #
    # Directory structure
    #

    def list_dir(self, path: str) -> List[DirectoryEntry]:
        output = execute(
            self.session, "ls --time-style=long-iso -l " + normalize_path(path)
        )
        return parse_listing(output)

    def move(self, path: str, new_path: str) -> None:
        execute_only(
            self.session, f"mv {normalize_path(path)} {normalize_path(new_path)}"
        )

    def copy(self, path: str, new_path: str) -> None:
        execute_only(
            self.session, f"cp -r {normalize_path(path)} {normalize_path(new_path)}"
        )

    def delete(self, path: str) -> None:
        execute_only(self.session, "rm -r " + normalize_path(path))

    def mkdir(self, path: str, name: str) -> None:
        execute_only(self.session, f"mkdir -p {normalize_path(path)}/{name}")

    def chmod(self, path: str, perms_code: str, recursive: bool = False) -> None:
        if recursive:
            command = f"chmod -r {perms_code} {normalize_path(path)}"
        else:
            command = f"chmod {perms_code} {normalize_path(path)}"

        execute_only(self.session, command)

    #
    # File contents
    #

    def read_file(self, path: str) -> bytes:
        return self._transfer.read(self.session, path)

    def save(self, path: str, data: bytes) -> None:
        self._transfer.write(self.session, path, data)

    def close(self) -> None:
        self.session.close()
