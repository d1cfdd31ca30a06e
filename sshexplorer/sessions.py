"""
Module with the table that associates logged in users with their file explorers.

Each user gets their own SSH connection, which is opened on login and reused across
their requests until they log out or their session expires. The table is an explicit
object owned by the request layer rather than global state, and closes connections
as entries are removed.
"""

import threading
from typing import Callable, Dict, Optional

from sshexplorer.filesystem import Credentials, FileExplorer, SSHFileExplorer
from sshexplorer.logger import log

ExplorerFactory = Callable[[Credentials], FileExplorer]


class SessionTable:
    """Thread-safe mapping of user identities to connected file explorers."""

    def __init__(self, factory: ExplorerFactory = SSHFileExplorer):
        """Instantiate an empty table that creates explorers with the given factory."""
        self._factory = factory
        self._explorers: Dict[str, FileExplorer] = {}
        self._lock = threading.Lock()

    def login(self, identity: str, credentials: Credentials) -> FileExplorer:
        """
        Connect a new file explorer for the identity and store it.

        An existing explorer for the same identity is closed and replaced. Nothing is
        stored if connecting fails.
        """
        explorer = self._factory(credentials)
        explorer.init()

        with self._lock:
            previous = self._explorers.get(identity)
            self._explorers[identity] = explorer

        if previous is not None:
            log.info(f"replacing session of {identity}")
            self._close(identity, previous)

        return explorer

    def get(self, identity: str) -> Optional[FileExplorer]:
        with self._lock:
            return self._explorers.get(identity)

    def logout(self, identity: str) -> None:
        """Remove and close the explorer of the identity, if there is one."""
        with self._lock:
            explorer = self._explorers.pop(identity, None)

        if explorer is not None:
            self._close(identity, explorer)

    def close_all(self) -> None:
        with self._lock:
            explorers = list(self._explorers.items())
            self._explorers.clear()

        for identity, explorer in explorers:
            self._close(identity, explorer)

    @staticmethod
    def _close(identity: str, explorer: FileExplorer) -> None:
        # The entry is already gone, so a failure to close is only worth logging.
        try:
            explorer.close()
        except Exception as e:
            log.error(f"failed to close session of {identity}: {e}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._explorers)

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._explorers
