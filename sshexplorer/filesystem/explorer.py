"""Module defining the capability set shared by all file system backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
import posixpath
from typing import Any, Iterable, List

from sshexplorer.filesystem.common import DirectoryEntry


class FileExplorer(ABC):
    """
    Base class for file system backends used by the request layer.

    Callers must call init() exactly once before any other operation and close()
    exactly once when they are done. Failures are raised as RemoteFileSystemError.
    """

    @abstractmethod
    def init(self) -> None:
        """Connect to the backend."""

    @abstractmethod
    def list_dir(self, path: str) -> List[DirectoryEntry]:
        """List the entries of a directory in backend order."""

    @abstractmethod
    def move(self, path: str, new_path: str) -> None:
        """Move or rename a file or directory."""

    @abstractmethod
    def copy(self, path: str, new_path: str) -> None:
        """Copy a file or directory recursively."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete a file or directory recursively."""

    @abstractmethod
    def chmod(self, path: str, perms_code: str, recursive: bool = False) -> None:
        """Change permissions using an octal code like '755'."""

    @abstractmethod
    def mkdir(self, path: str, name: str) -> None:
        """Create directory name within path, including missing parents."""

    @abstractmethod
    def save(self, path: str, data: bytes) -> None:
        """Replace the contents of a file."""

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """Read the full contents of a file."""

    @abstractmethod
    def close(self) -> None:
        """Disconnect from the backend."""

    def move_into(self, paths: Iterable[str], directory: str) -> None:
        """Move every path into a directory while keeping its base name."""
        for path in paths:
            name = posixpath.basename(path.rstrip("/"))
            self.move(path, posixpath.join(directory, name))

    def __enter__(self) -> FileExplorer:
        self.init()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
