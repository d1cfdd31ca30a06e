"""Module for running one-shot shell commands over a transport session."""

import socket

import paramiko

from sshexplorer.filesystem.common import CommandError, encode_remote
from sshexplorer.filesystem.transport import TransportSession
from sshexplorer.logger import log, summarize

# Size of the reads from the command channel.
RECV_SIZE = 32768


def execute(session: TransportSession, command: str) -> bytes:
    """
    Run a command on the remote host and return its combined stdout and stderr.

    Every command runs in its own channel. A failing command raises a CommandError,
    but leaves the session intact.
    """
    log.info(f"exec: {summarize(command)}")

    transport = session.transport

    try:
        with transport.open_session() as channel:
            channel.set_combine_stderr(True)
            channel.exec_command(encode_remote(command))

            chunks = []

            while True:
                chunk = channel.recv(RECV_SIZE)

                if not chunk:
                    break

                chunks.append(chunk)

            exit_status = channel.recv_exit_status()
    except (paramiko.SSHException, socket.timeout, OSError) as e:
        raise CommandError(command) from e

    output = b"".join(chunks)

    if exit_status != 0:
        raise CommandError(command, exit_status, output)

    return output


def execute_only(session: TransportSession, command: str) -> None:
    """Run a command on the remote host for its side effects only."""
    execute(session, command)
