"""
Module that moves file contents between the remote host and this process over SFTP.

Contents are staged through a local temporary file in both directions rather than
buffered directly. This bounds the memory used while streaming large files and keeps
the chunking of the SFTP protocol independent from the buffer of the caller. The
staging file only lives for the duration of a single read or write.
"""

import contextlib
import os
import shutil
import socket
import tempfile
from typing import Generator, Optional

import paramiko

from sshexplorer.filesystem.common import encode_remote, TransferError
from sshexplorer.filesystem.transport import TransportSession
from sshexplorer.logger import log, summarize

# Chunk size used for SFTP packets and for copying between files.
CHUNK_SIZE = 1 << 15


class ContentTransfer:
    """Reads and writes remote file contents through local staging files."""

    def __init__(self, staging_dir: Optional[str] = None):
        """Instantiate with a directory for staging files (system default if None)."""
        self._staging_dir = staging_dir

    def read(self, session: TransportSession, remote_path: str) -> bytes:
        """Read the full contents of a remote file."""
        log.debug(f"reading {summarize(remote_path)}")

        with self._staging_file("sshexplorer-readfile-") as staging_path:
            try:
                with self._open_sftp(session) as sftp:
                    with sftp.open(encode_remote(remote_path), "rb") as remote_file:
                        with open(staging_path, "wb") as staging:
                            shutil.copyfileobj(remote_file, staging, CHUNK_SIZE)

                with open(staging_path, "rb") as staging:
                    return staging.read()
            except (paramiko.SSHException, socket.timeout, OSError) as e:
                raise TransferError(
                    f"failed to read {summarize(remote_path)}: {e}"
                ) from e

    def write(self, session: TransportSession, remote_path: str, data: bytes) -> None:
        """Replace the contents of a remote file, creating it if it doesn't exist."""
        log.debug(f"writing {len(data)} bytes to {summarize(remote_path)}")

        with self._staging_file("sshexplorer-edit-") as staging_path:
            try:
                with open(staging_path, "wb") as staging:
                    staging.write(data)

                with open(staging_path, "rb") as staging:
                    with self._open_sftp(session) as sftp:
                        with sftp.open(encode_remote(remote_path), "wb") as remote_file:
                            shutil.copyfileobj(staging, remote_file, CHUNK_SIZE)
            except (paramiko.SSHException, socket.timeout, OSError) as e:
                raise TransferError(
                    f"failed to write {summarize(remote_path)}: {e}"
                ) from e

    @staticmethod
    def _open_sftp(session: TransportSession) -> paramiko.SFTPClient:
        """Open an SFTP sub-session on the transport of the session."""
        try:
            sftp = paramiko.SFTPClient.from_transport(
                session.transport, max_packet_size=CHUNK_SIZE
            )
        except (paramiko.SSHException, socket.timeout, OSError) as e:
            raise TransferError(f"failed to open SFTP session: {e}") from e

        if sftp is None:
            raise TransferError("failed to open SFTP session")

        return sftp

    @contextlib.contextmanager
    def _staging_file(self, prefix: str) -> Generator[str, None, None]:
        """Create an empty staging file that is removed again on exit."""
        try:
            fd, path = tempfile.mkstemp(prefix=prefix, dir=self._staging_dir)
        except OSError as e:
            raise TransferError(f"failed to create staging file: {e}") from e

        os.close(fd)

        try:
            yield path
        finally:
            with contextlib.suppress(FileNotFoundError):
                os.remove(path)
