"""Module that performs the actions of the command-line interface on a file explorer."""

from typing import Callable, Dict, IO, List

from sshexplorer.args import Arguments
from sshexplorer.filesystem import DirectoryEntry, FileExplorer


def format_entry(entry: DirectoryEntry) -> str:
    """Format a directory entry as a single line similar to ls -l."""
    return (
        f"{entry.kind.value:<4} {entry.permissions} {entry.size:>10} "
        f"{entry.modified} {entry.name}"
    )


def _list(explorer: FileExplorer, args: Arguments, out: IO[bytes]) -> None:
    for entry in explorer.list_dir(args.path):
        line = format_entry(entry) + "\n"
        out.write(line.encode("utf-8", errors="surrogateescape"))


def _move(explorer: FileExplorer, args: Arguments, out: IO[bytes]) -> None:
    explorer.move(args.source, args.target)


def _copy(explorer: FileExplorer, args: Arguments, out: IO[bytes]) -> None:
    explorer.copy(args.source, args.target)


def _delete(explorer: FileExplorer, args: Arguments, out: IO[bytes]) -> None:
    for path in args.paths:
        explorer.delete(path)


def _mkdir(explorer: FileExplorer, args: Arguments, out: IO[bytes]) -> None:
    explorer.mkdir(args.path, args.name)


def _chmod(explorer: FileExplorer, args: Arguments, out: IO[bytes]) -> None:
    for path in args.paths:
        explorer.chmod(path, args.code, args.recursive)


def _cat(explorer: FileExplorer, args: Arguments, out: IO[bytes]) -> None:
    out.write(explorer.read_file(args.path))


def _get(explorer: FileExplorer, args: Arguments, out: IO[bytes]) -> None:
    data = explorer.read_file(args.source)

    with open(args.target, "wb") as f:
        f.write(data)


def _put(explorer: FileExplorer, args: Arguments, out: IO[bytes]) -> None:
    with open(args.source, "rb") as f:
        data = f.read()

    explorer.save(args.target, data)


ACTIONS: Dict[str, Callable[[FileExplorer, Arguments, IO[bytes]], None]] = {
    "ls": _list,
    "mv": _move,
    "cp": _copy,
    "rm": _delete,
    "mkdir": _mkdir,
    "chmod": _chmod,
    "cat": _cat,
    "get": _get,
    "put": _put,
}


def run_action(explorer: FileExplorer, args: Arguments, out: IO[bytes]) -> None:
    """Run the action selected on the command line, writing any output to out."""
    ACTIONS[args.action](explorer, args, out)


# Arguments of each action that refer to remote paths
REMOTE_PATH_ARGS: Dict[str, List[str]] = {
    "ls": ["path"],
    "mv": ["source", "target"],
    "cp": ["source", "target"],
    "rm": ["paths"],
    "mkdir": ["path"],
    "chmod": ["paths"],
    "cat": ["path"],
    "get": ["source"],
    "put": ["target"],
}


def remote_paths(args: Arguments) -> List[str]:
    """Collect all remote paths that the selected action operates on."""
    paths: List[str] = []

    for name in REMOTE_PATH_ARGS[args.action]:
        value = getattr(args, name)

        if isinstance(value, list):
            paths.extend(value)
        else:
            paths.append(value)

    return paths
