"""Data structures, errors and path handling used by multiple file system components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class RemoteFileSystemError(Exception):
    """Base class for all errors raised by remote file system operations."""


class SessionError(RemoteFileSystemError):
    """Connecting failed or a session was used outside of its open window."""


class CommandError(RemoteFileSystemError):
    """A remote command could not be run or exited with a non-zero status."""

    def __init__(
        self, command: str, exit_status: Optional[int] = None, output: bytes = b""
    ):
        """Instantiate with the failed command, its exit status and its output."""
        self.command = command
        self.exit_status = exit_status
        self.output = output

        message = f"command '{command}' failed"

        if exit_status is not None:
            message += f" with exit status {exit_status}"

        details = output.decode("utf-8", errors="replace").strip()

        if details:
            message += f": {details}"

        super().__init__(message)


class TransferError(RemoteFileSystemError):
    """Opening or streaming remote file contents failed."""


@dataclass(frozen=True)
class Credentials:
    """Address and password credentials of a remote host."""

    host: str
    username: str
    password: str
    port: int = 22

    @staticmethod
    def parse_address(address: str, username: str, password: str) -> Credentials:
        """
        Create credentials from an address in the host[:port] form.

        IPv6 hosts are written in brackets when a port follows, as in [::1]:2222. A
        bare host with more than one colon is taken to be an IPv6 address without port.
        """
        if address.startswith("["):
            host, sep, rest = address[1:].partition("]")

            if not sep or (rest and not rest.startswith(":")):
                raise ValueError(f"invalid address '{address}'")

            port = rest[1:]
        elif address.count(":") == 1:
            host, _, port = address.partition(":")
        else:
            host, port = address, ""

        if not port:
            return Credentials(host, username, password)

        try:
            return Credentials(host, username, password, int(port))
        except ValueError:
            raise ValueError(f"invalid port in address '{address}'")


class EntryKind(Enum):
    """Kind of a directory entry."""

    FILE = "file"
    DIR = "dir"


@dataclass
class DirectoryEntry:
    """A single entry of a directory listing."""

    name: str
    permissions: str
    size: str
    modified: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIR

    def to_dict(self) -> Dict[str, str]:
        """Render the entry with the keys expected by the web file manager."""
        return {
            "name": self.name,
            "rights": self.permissions,
            "size": self.size,
            "date": self.modified,
            "type": self.kind.value,
        }


def normalize_path(path: str) -> str:
    """
    Prepare a path for interpolation into a remote shell command.

    Relative paths are anchored at the root and absolute paths are single-quoted.
    Note that this means relative paths are not quoted at all.
    """
    if not path.startswith("/"):
        return "/" + path

    return "'" + path + "'"


def encode_remote(text: str) -> bytes:
    """
    Encode a command or path for the remote host.

    Names that were decoded from remote output keep their undecodable bytes as
    surrogate escapes, so encoding restores the exact original bytes.
    """
    return text.encode("utf-8", errors="surrogateescape")


def is_allowed_path(path: str, home: str) -> bool:
    """Check if a path is empty or lies within the given home prefix."""
    return path == "" or path.startswith(home)
