"""Module that adds flags to pytest and provides fakes for paramiko objects."""

import io
import shlex
from typing import Dict, List, Set
from unittest import mock

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--ssh", action="store_true", default=False, help="Run live SSH tests"
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "ssh: mark test as requiring an SSH server")


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--ssh"):
        skip_ssh = pytest.mark.skip(reason="only runs with --ssh option")

        for item in items:
            if "ssh" in item.keywords:
                item.add_marker(skip_ssh)


class FakeRemoteFile(io.BytesIO):
    """Remote file that stores its contents in the fake SFTP server when closed."""

    def __init__(self, files: Dict[str, bytes], path: str):
        super().__init__()
        self._files = files
        self._path = path

    def close(self):
        if not self.closed:
            self._files[self._path] = self.getvalue()

        super().close()


class FakeSFTP:
    """In-memory stand-in for paramiko.SFTPClient."""

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.opened: List[tuple] = []
        self.raw_paths: List[bytes] = []
        self.closed = False

    def open(self, path, mode="r"):
        if isinstance(path, bytes):
            self.raw_paths.append(path)
            path = path.decode("utf-8", errors="surrogateescape")

        self.opened.append((path, mode))

        if "r" in mode:
            if path not in self.files:
                raise FileNotFoundError(2, "No such file", path)

            return io.BytesIO(self.files[path])
        else:
            return FakeRemoteFile(self.files, path)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


@pytest.fixture
def fake_sftp():
    sftp = FakeSFTP()

    with mock.patch("paramiko.SFTPClient.from_transport", return_value=sftp):
        yield sftp


class FakeChannel:
    """Channel that emulates a couple of shell commands on a set of paths."""

    def __init__(self, shell):
        self._shell = shell
        self._output = b""
        self._exit_status = -1
        self.closed = False

    def set_combine_stderr(self, combine):
        pass

    def exec_command(self, command):
        self._shell.raw_commands.append(command)
        command = command.decode("utf-8", errors="surrogateescape")

        self._shell.commands.append(command)
        self._exit_status, output = self._shell.run(shlex.split(command))
        self._output = output.encode("utf-8", errors="surrogateescape")

    def recv(self, size):
        chunk, self._output = self._output[:size], self._output[size:]
        return chunk

    def recv_exit_status(self):
        return self._exit_status

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeShell:
    """Remote host that knows which paths exist and supports rm, mkdir and ls."""

    def __init__(self, paths=()):
        self.paths: Set[str] = set(paths)
        self.commands: List[str] = []
        self.raw_commands: List[bytes] = []
        self.listing = ""
        self.channels: List[FakeChannel] = []

    def run(self, argv):
        if argv[:2] == ["rm", "-r"]:
            if argv[2] not in self.paths:
                return 1, f"rm: cannot remove '{argv[2]}': No such file or directory\n"

            self.paths.discard(argv[2])
            return 0, ""
        elif argv[:2] == ["mkdir", "-p"]:
            self.paths.add(argv[2])
            return 0, ""
        elif argv[0] == "ls":
            if argv[-1] not in self.paths:
                return 2, f"ls: cannot access '{argv[-1]}': No such file or directory\n"

            return 0, self.listing
        else:
            return 127, f"sh: {argv[0]}: command not found\n"

    def open_session(self):
        channel = FakeChannel(self)
        self.channels.append(channel)
        return channel


@pytest.fixture
def fake_shell():
    return FakeShell()


@pytest.fixture
def session(fake_shell):
    """Open transport session whose channels run on the fake shell."""
    session = mock.Mock()
    session.is_open = True
    session.transport.open_session.side_effect = fake_shell.open_session
    return session
