"""
Modules that give CRUD-style access to a file system on a remote host.

The remote host is only assumed to run an SSH server with a POSIX shell. Structural
operations like listing, moving and deleting are executed as shell commands, and the
textual output of ls is parsed into directory entries. File contents are transferred
over SFTP on the same connection.

Driving a shell with text commands is more fragile than a structured protocol, since
the output of ls depends on the locale and paths are interpolated into commands, but
it works with practically every host without installing anything on it.
"""

from .common import (
    CommandError,
    Credentials,
    DirectoryEntry,
    EntryKind,
    RemoteFileSystemError,
    SessionError,
    TransferError,
)
from .explorer import FileExplorer
from .ssh import SSHFileExplorer

__all__ = [
    "CommandError",
    "Credentials",
    "DirectoryEntry",
    "EntryKind",
    "FileExplorer",
    "RemoteFileSystemError",
    "SessionError",
    "SSHFileExplorer",
    "TransferError",
]
