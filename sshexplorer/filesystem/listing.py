"""
Parser for the output of `ls --time-style=long-iso -l`.

A typical listing looks like this:

    total 12
    drwxr-xr-x 2 user group 4096 2024-01-01 10:00 backups
    -rw-r--r-- 1 user group  100 2024-01-01 10:00 my file.txt

The columns are separated by a variable amount of whitespace, which means that a
plain split would break up names that contain spaces. Names are therefore taken from
the raw line, starting at the first occurrence of the first name token.

Output that isn't valid UTF-8 is decoded with surrogate escapes, which lets names be
passed back to the remote host byte for byte.
"""

from typing import List, Optional, Union

from sshexplorer.filesystem.common import DirectoryEntry, EntryKind

# Number of columns in a long-format listing line with an ISO timestamp.
MIN_COLUMNS = 8


def parse_listing(output: Union[str, bytes]) -> List[DirectoryEntry]:
    """Parse listing output into entries, silently dropping malformed lines."""
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="surrogateescape")

    entries = []

    for line in output.split("\n"):
        entry = parse_listing_line(line.rstrip("\r"))

        if entry is not None:
            entries.append(entry)

    return entries


def parse_listing_line(line: str) -> Optional[DirectoryEntry]:
    """Parse a single listing line or return None if it doesn't describe an entry."""
    if line.startswith("total"):
        return None

    tokens = line.split()

    if len(tokens) < MIN_COLUMNS:
        return None

    if tokens[0].startswith("d"):
        kind = EntryKind.DIR
    else:
        kind = EntryKind.FILE

    # Names that also occur in an earlier column (e.g. a file named "1") are cut
    # from that earlier occurrence.
    name_offset = line.find(tokens[MIN_COLUMNS - 1])

    return DirectoryEntry(
        name=line[name_offset:],
        permissions=tokens[0],
        size=tokens[4],
        modified=f"{tokens[5]} {tokens[6]}:00",
        kind=kind,
    )
