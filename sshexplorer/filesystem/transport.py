"""Module that manages the authenticated SSH connection to the remote host."""

from __future__ import annotations

import socket
from typing import Optional

import paramiko

from sshexplorer.constants import DEFAULT_TIMEOUT
from sshexplorer.filesystem.common import Credentials, SessionError
from sshexplorer.logger import log


class TransportSession:
    """
    Handle for one authenticated SSH connection.

    Commands and file transfers open their own channels on the shared transport, so a
    single session can serve multiple operations. The session is only usable between
    a successful open() and close().
    """

    def __init__(self, client: paramiko.SSHClient):
        """Wrap an already connected SSH client."""
        self._client: Optional[paramiko.SSHClient] = client

    @staticmethod
    def open(
        credentials: Credentials, timeout: float = DEFAULT_TIMEOUT
    ) -> TransportSession:
        """
        Connect and authenticate with password credentials.

        Dial failures, handshake failures and rejected credentials are all reported as
        a SessionError.
        """
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        log.info(
            f"connecting to {credentials.username}@{credentials.host}:{credentials.port}"
        )

        try:
            client.connect(
                credentials.host,
                port=credentials.port,
                username=credentials.username,
                password=credentials.password,
                timeout=timeout,
                banner_timeout=timeout,
                auth_timeout=timeout,
                allow_agent=False,
                look_for_keys=False,
            )
        except (paramiko.SSHException, socket.timeout, OSError) as e:
            client.close()
            raise SessionError(f"failed to connect to {credentials.host}: {e}") from e

        return TransportSession(client)

    @property
    def is_open(self) -> bool:
        return self._client is not None

    @property
    def transport(self) -> paramiko.Transport:
        """Get the underlying transport for opening channels."""
        if self._client is None:
            raise SessionError("session is not open")

        transport = self._client.get_transport()

        if transport is None or not transport.is_active():
            raise SessionError("session transport is no longer active")

        return transport

    def close(self) -> None:
        """Tear down the connection. Closing an already closed session does nothing."""
        if self._client is None:
            return

        client = self._client
        self._client = None

        client.close()
