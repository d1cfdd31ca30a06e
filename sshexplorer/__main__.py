"""
Module implementing the command-line interface of sshexplorer.

sshexplorer connects to a remote host over SSH with password authentication and runs
a single file system action there, like listing a directory or uploading a file. The
connection is closed again once the action has finished.
"""

import getpass
import logging
import os
import signal
import sys
from typing import List, NoReturn, Optional

from sshexplorer.actions import remote_paths, run_action
from sshexplorer.args import Arguments
from sshexplorer.config import Config
import sshexplorer.constants as constants
from sshexplorer.filesystem import Credentials, RemoteFileSystemError, SSHFileExplorer
from sshexplorer.filesystem.common import is_allowed_path
from sshexplorer.logger import log, printable


def main(arguments: Optional[List[str]] = None) -> NoReturn:
    """
    Run a file system action on a remote host with the given arguments.

    Defaults to parsing command-line arguments from sys.argv if none are specified.
    """
    # Parse command-line arguments.
    args = Arguments.parse(arguments)

    # Configure debug logging.
    if args.debug:
        log.setLevel(logging.DEBUG)
    else:
        log.setLevel(logging.ERROR)

    config = Config.load(os.path.expanduser(args.config))

    try:
        _check_paths(args, config)

        credentials = _credentials(args, config)

        explorer = SSHFileExplorer(
            credentials,
            timeout=args.timeout or config.backend.timeout,
            staging_dir=config.transfer.staging_dir,
        )

        with explorer:
            run_action(explorer, args, sys.stdout.buffer)

        exit_code = 0
    except KeyboardInterrupt:
        exit_code = 128 + signal.SIGINT
    except (RemoteFileSystemError, OSError, ValueError) as e:
        log.error(f"failed to run {args.action}: {printable(e)}")
        exit_code = constants.SSHEXPLORER_ERROR_CODE

    sys.exit(exit_code)


def _check_paths(args: Arguments, config: Config) -> None:
    """Refuse remote paths outside of the configured home directory."""
    for path in remote_paths(args):
        if not is_allowed_path(path, config.backend.home):
            raise ValueError(f"path not allowed: {path}")


def _credentials(args: Arguments, config: Config) -> Credentials:
    """Combine the destination, the configured host and the password."""
    user, address = args.split_destination()

    password = os.environ.get(constants.PASSWORD_ENV_VAR)

    if password is None:
        password = getpass.getpass()

    return Credentials.parse_address(
        address or config.backend.host, user or getpass.getuser(), password,
    )


if __name__ == "__main__":
    main()
