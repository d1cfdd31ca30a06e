"""Module defining the command-line arguments and providing a parser for them."""

from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

from sshexplorer.constants import DEFAULT_CONFIG_PATH, VERSION


class Arguments(argparse.Namespace):
    """Parsed command-line arguments."""

    destination: str
    action: str

    config: str
    debug: bool
    timeout: Optional[float]

    # Action specific
    path: str
    paths: List[str]
    source: str
    target: str
    name: str
    code: str
    recursive: bool

    @classmethod
    def parse(cls, args: Optional[List[str]] = None) -> Arguments:
        """
        Parse command-line arguments from the given list of strings.

        Defaults to sys.argv if none are specified.
        """
        return cls._get_parser().parse_args(args, namespace=cls())

    def split_destination(self) -> Tuple[Optional[str], Optional[str]]:
        """
        Split the destination into a user and an address.

        Either part is None if it was left out, e.g. "@" yields (None, None) and
        "alice@" yields ("alice", None).
        """
        user, sep, address = self.destination.rpartition("@")

        if not sep:
            user = ""

        return user or None, address or None

    @classmethod
    def _get_parser(cls) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="sshexplorer",
            description="Browse and modify a file system on a remote host over SSH.",
            usage="sshexplorer [option...] destination action [arg...]",
        )

        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {VERSION}",
            help="show the program version",
        )

        # Path to (optional) config file
        parser.add_argument(
            "--config",
            type=str,
            help=f"path to config file (default is {DEFAULT_CONFIG_PATH})",
            default=DEFAULT_CONFIG_PATH,
        )

        # Enable debug output for development
        parser.add_argument(
            "--debug", action="store_true", help="enable debug information"
        )

        # Override the connection timeout from the config file
        parser.add_argument(
            "--timeout",
            type=cls._parse_timeout,
            help="timeout for connecting in seconds",
        )

        parser.add_argument(
            "destination",
            type=str,
            help="remote host as [user@]host[:port] (host may be empty)",
        )

        actions = parser.add_subparsers(dest="action", metavar="action")
        actions.required = True

        ls = actions.add_parser("ls", help="list a directory")
        ls.add_argument("path", type=str)

        mv = actions.add_parser("mv", help="move or rename a file or directory")
        mv.add_argument("source", type=str)
        mv.add_argument("target", type=str)

        cp = actions.add_parser("cp", help="copy a file or directory")
        cp.add_argument("source", type=str)
        cp.add_argument("target", type=str)

        rm = actions.add_parser("rm", help="delete files or directories")
        rm.add_argument("paths", type=str, nargs="+")

        mkdir = actions.add_parser("mkdir", help="create a directory")
        mkdir.add_argument("path", type=str, help="parent directory")
        mkdir.add_argument("name", type=str, help="name of the new directory")

        chmod = actions.add_parser("chmod", help="change permissions")
        chmod.add_argument(
            "-R", action="store_true", dest="recursive", help="change recursively"
        )
        chmod.add_argument("code", type=cls._parse_perms_code)
        chmod.add_argument("paths", type=str, nargs="+")

        cat = actions.add_parser("cat", help="print the contents of a file")
        cat.add_argument("path", type=str)

        get = actions.add_parser("get", help="download a file")
        get.add_argument("source", type=str, help="remote file")
        get.add_argument("target", type=str, help="local file")

        put = actions.add_parser("put", help="upload a file")
        put.add_argument("source", type=str, help="local file")
        put.add_argument("target", type=str, help="remote file")

        return parser

    @staticmethod
    def _parse_timeout(arg: str) -> float:
        try:
            val = float(arg)
            assert val > 0
            return val
        except (ValueError, AssertionError):
            raise argparse.ArgumentTypeError("expected number > 0")

    @staticmethod
    def _parse_perms_code(arg: str) -> str:
        if not 3 <= len(arg) <= 4 or any(c not in "01234567" for c in arg):
            raise argparse.ArgumentTypeError("expected octal permissions like 755")

        return arg
