"""Classification of resolution failures.

Resolution raises the built-in OSError family unchanged; classify_error()
maps an exception onto the four kinds callers usually branch on.
"""

from __future__ import annotations

import errno
from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    LOOP = "loop"
    OTHER_IO = "other_io"


def classify_error(exc: OSError) -> ErrorKind:
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return ErrorKind.NOT_FOUND
    if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EPERM):
        return ErrorKind.PERMISSION_DENIED
    if exc.errno == errno.ELOOP:
        return ErrorKind.LOOP
    return ErrorKind.OTHER_IO
