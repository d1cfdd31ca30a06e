"""Module containing utilities for logging, along with a standard logger."""

import logging
from typing import Any, Optional


def _get_logger(name: Optional[str] = "sshexplorer") -> logging.Logger:
    stderrOutput = logging.StreamHandler()

    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    stderrOutput.setFormatter(formatter)

    logger = logging.getLogger(name)
    logger.addHandler(stderrOutput)

    return logger


def printable(obj: Any) -> str:
    """
    Return a stringified representation of the object that is safe to log.

    Remote names that aren't valid UTF-8 carry their raw bytes as surrogate escapes.
    Those can't be written to a text stream, so they are shown as \\x escapes.
    """
    return (
        str(obj)
        .encode("utf-8", errors="surrogateescape")
        .decode("utf-8", errors="backslashreplace")
    )


def summarize(obj: Any, max_length: int = 255) -> str:
    """Return a printable representation of the object up to the given length."""
    stringified_obj = printable(obj)

    if len(stringified_obj) <= max_length:
        return stringified_obj
    else:
        return stringified_obj[: max_length - 3] + "..."


# Default logger
log = _get_logger()
