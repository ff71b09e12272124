"""Host filesystem primitives and platform detection.

Everything the resolver learns about the filesystem goes through
HostFilesystem, so the boundary logic can be exercised against a fake in
tests. ``realpath`` is the plain "resolve this path" primitive: it follows
every symlink, including /proc magic links, and fails on missing components.

On Windows, os.path.realpath() may hand back an extended-length path
(``\\\\?\\C:\\...``). simplify_extended_path() turns it back into the familiar
form when that is unambiguous. It is purely cosmetic and never changes which
file a path denotes.
"""

from __future__ import annotations

import errno
import os
import re
import sys

_IS_WINDOWS = sys.platform == "win32"
_IS_LINUX = sys.platform.startswith("linux")

_VERBATIM_PREFIX = "\\\\?\\"
_VERBATIM_UNC_PREFIX = "\\\\?\\UNC\\"
_MAX_PATH = 260
_DRIVE_ROOT = re.compile(r"[A-Za-z]:\\")
_INVALID_WIN32_CHARS = re.compile(r'[<>:"|?*\x00-\x1f]')
_RESERVED_NAMES = frozenset(
    {"CON", "PRN", "AUX", "NUL", "CONIN$", "CONOUT$"}
    | {f"COM{i}" for i in range(1, 10)}
    | {f"LPT{i}" for i in range(1, 10)}
)


def has_proc_namespaces() -> bool:
    """True when /proc magic links exist on this platform."""
    return _IS_LINUX


class HostFilesystem:
    """Blocking filesystem queries used by the canonicalizers."""

    def realpath(self, path: str) -> str:
        if not path:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        return os.path.realpath(path, strict=True)

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)

    def lstat(self, path: str) -> os.stat_result:
        return os.lstat(path)

    def readlink(self, path: str) -> str:
        return os.readlink(path)

    def getcwd(self) -> str:
        return os.getcwd()


def _is_safe_component(name: str) -> bool:
    if name in ("", ".", ".."):
        return False
    if name.endswith((".", " ")):
        return False
    if _INVALID_WIN32_CHARS.search(name):
        return False
    stem = name.split(".", 1)[0].rstrip(" ").upper()
    return stem not in _RESERVED_NAMES


def simplify_extended_path(path: str) -> str:
    """Strip the ``\\\\?\\`` verbatim prefix when the plain form is equivalent.

    ``\\\\?\\C:\\dir`` becomes ``C:\\dir`` and ``\\\\?\\UNC\\srv\\share`` becomes
    ``\\\\srv\\share``. Paths that only work in verbatim form (too long,
    reserved device names, trailing dots, forward slashes) come back unchanged.
    """
    if path.startswith(_VERBATIM_UNC_PREFIX):
        rest = path[len(_VERBATIM_UNC_PREFIX):]
        candidate = "\\\\" + rest
        components = rest.split("\\")
        if len(components) < 2 or not components[0] or not components[1]:
            return path
    elif path.startswith(_VERBATIM_PREFIX):
        rest = path[len(_VERBATIM_PREFIX):]
        if not _DRIVE_ROOT.match(rest):
            return path
        candidate = rest
        components = rest[3:].split("\\")
    else:
        return path

    if len(candidate) >= _MAX_PATH or "/" in rest:
        return path
    # A trailing separator leaves one empty component, which is fine.
    if components and components[-1] == "":
        components = components[:-1]
    if not all(_is_safe_component(name) for name in components):
        return path
    return candidate
