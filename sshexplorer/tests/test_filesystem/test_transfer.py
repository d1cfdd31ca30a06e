import io
import os
from unittest import mock

import paramiko
import pytest

from sshexplorer.filesystem.common import RemoteFileSystemError, TransferError
from sshexplorer.filesystem.transfer import CHUNK_SIZE, ContentTransfer


@pytest.fixture
def transfer(tmp_path):
    return ContentTransfer(str(tmp_path))


def test_write_then_read(transfer, session, fake_sftp, tmp_path):
    data = os.urandom(CHUNK_SIZE * 4 + 123)

    transfer.write(session, "/home/alice/data.bin", data)

    assert fake_sftp.files["/home/alice/data.bin"] == data
    assert transfer.read(session, "/home/alice/data.bin") == data

    assert list(tmp_path.iterdir()) == []


def test_empty_file(transfer, session, fake_sftp):
    transfer.write(session, "/empty", b"")

    assert transfer.read(session, "/empty") == b""


def test_write_replaces_contents(transfer, session, fake_sftp):
    fake_sftp.files["/notes.txt"] = b"a much longer original text"

    transfer.write(session, "/notes.txt", b"short")

    assert fake_sftp.files["/notes.txt"] == b"short"
    assert fake_sftp.opened[-1] == ("/notes.txt", "wb")


def test_packet_size(transfer, session, fake_sftp):
    transfer.write(session, "/x", b"x")

    paramiko.SFTPClient.from_transport.assert_called_with(
        session.transport, max_packet_size=CHUNK_SIZE
    )


def test_sftp_is_closed(transfer, session, fake_sftp):
    transfer.write(session, "/x", b"x")
    assert fake_sftp.closed

    fake_sftp.closed = False
    transfer.read(session, "/x")
    assert fake_sftp.closed


def test_read_missing_file(transfer, session, fake_sftp, tmp_path):
    with pytest.raises(TransferError) as exc_info:
        transfer.read(session, "/missing")

    assert isinstance(exc_info.value.__cause__, FileNotFoundError)
    assert fake_sftp.closed
    assert list(tmp_path.iterdir()) == []


def test_read_interrupted(transfer, session, fake_sftp, tmp_path):
    broken = mock.MagicMock()
    broken.__enter__.return_value = broken
    broken.read.side_effect = [b"partial", OSError("connection lost")]

    with mock.patch.object(fake_sftp, "open", return_value=broken):
        with pytest.raises(TransferError):
            transfer.read(session, "/x")

    assert broken.__exit__.called
    assert list(tmp_path.iterdir()) == []


def test_write_interrupted(transfer, session, fake_sftp, tmp_path):
    broken = mock.MagicMock()
    broken.__enter__.return_value = broken
    broken.write.side_effect = paramiko.SSHException("connection lost")

    with mock.patch.object(fake_sftp, "open", return_value=broken):
        with pytest.raises(TransferError):
            transfer.write(session, "/x", b"data")

    assert broken.__exit__.called
    assert list(tmp_path.iterdir()) == []


def test_sftp_unavailable(transfer, session, tmp_path):
    with mock.patch(
        "paramiko.SFTPClient.from_transport",
        side_effect=paramiko.SSHException("subsystem request failed"),
    ):
        with pytest.raises(TransferError):
            transfer.read(session, "/x")

        with pytest.raises(TransferError):
            transfer.write(session, "/x", b"data")

    assert list(tmp_path.iterdir()) == []


def test_staging_file_prefixes(transfer, session, fake_sftp, tmp_path):
    seen = []

    def remote_open(path, mode):
        seen.extend(os.listdir(tmp_path))
        return io.BytesIO(b"abc") if "r" in mode else io.BytesIO()

    with mock.patch.object(fake_sftp, "open", side_effect=remote_open):
        transfer.read(session, "/x")
        transfer.write(session, "/x", b"abc")

    assert seen[0].startswith("sshexplorer-readfile-")
    assert seen[1].startswith("sshexplorer-edit-")


def test_missing_staging_dir(session, fake_sftp, tmp_path):
    transfer = ContentTransfer(str(tmp_path / "missing"))
    fake_sftp.files["/x"] = b"abc"

    with pytest.raises(TransferError) as exc_info:
        transfer.read(session, "/x")

    assert isinstance(exc_info.value, RemoteFileSystemError)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    with pytest.raises(TransferError):
        transfer.write(session, "/x", b"data")

    assert fake_sftp.opened == []
    assert fake_sftp.files["/x"] == b"abc"


def test_staging_write_failure(transfer, session, fake_sftp, tmp_path):
    real_open = open

    def local_open(path, mode="r", *args, **kwargs):
        if "w" in mode:
            raise PermissionError(13, "Permission denied", path)

        return real_open(path, mode, *args, **kwargs)

    with mock.patch("builtins.open", side_effect=local_open):
        with pytest.raises(TransferError):
            transfer.write(session, "/x", b"data")

    assert "/x" not in fake_sftp.files
    assert list(tmp_path.iterdir()) == []


def test_undecodable_remote_path(transfer, session, fake_sftp):
    path = b"/caf\xe9".decode("utf-8", errors="surrogateescape")

    transfer.write(session, path, b"data")

    assert transfer.read(session, path) == b"data"
    assert fake_sftp.raw_paths == [b"/caf\xe9", b"/caf\xe9"]
