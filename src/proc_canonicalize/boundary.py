"""Lexical detection of /proc namespace boundaries.

On Linux, ``/proc/<pid>/root`` and ``/proc/<pid>/cwd`` are "magic" links: the
kernel reports their target as the host's ``/`` (or the process cwd), but
walking through them lands inside the process's mount namespace. This module
only recognises the shape of such paths. It never touches the filesystem.

Recognised prefixes:
    /proc/<pid>/root              /proc/<pid>/cwd
    /proc/<pid>/task/<tid>/root   /proc/<pid>/task/<tid>/cwd

where <pid> is all ASCII digits, ``self`` or ``thread-self``, and <tid> is all
ASCII digits.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum

ROOT_MARKER = "/"
PARENT = ".."

_PROC = "proc"
_TASK = "task"
_SELF_TOKENS = frozenset({"self", "thread-self"})
_DIGITS = re.compile(r"[0-9]+")


class BoundaryKind(str, Enum):
    ROOT = "root"
    CWD = "cwd"


@dataclass(frozen=True)
class BoundaryPrefix:
    """``/proc/<process_token>[/task/<thread_token>]/<kind>``."""

    process_token: str
    kind: BoundaryKind
    thread_token: str | None = None

    @property
    def components(self) -> tuple[str, ...]:
        parts = [_PROC, self.process_token]
        if self.thread_token is not None:
            parts += [_TASK, self.thread_token]
        parts.append(self.kind.value)
        return tuple(parts)

    @property
    def path(self) -> str:
        return ROOT_MARKER + "/".join(self.components)

    def join(self, components: tuple[str, ...] | list[str] = ()) -> str:
        return join_components(self.path, components)

    def __str__(self) -> str:
        return self.path


def split_components(path: str | os.PathLike[str] | bytes) -> tuple[bool, tuple[str, ...]]:
    """Split a path into (is_absolute, components).

    Repeated separators and ``.`` segments are dropped, ``..`` is kept.
    """
    raw = os.fsdecode(path)
    absolute = raw.startswith(ROOT_MARKER)
    parts = tuple(part for part in raw.split("/") if part and part != ".")
    return absolute, parts


def join_components(base: str, components: tuple[str, ...] | list[str]) -> str:
    if not components:
        return base
    if base.endswith(ROOT_MARKER):
        return base + "/".join(components)
    return base + "/" + "/".join(components)


def _is_numeric_token(token: str) -> bool:
    return _DIGITS.fullmatch(token) is not None


def find_namespace_boundary(
    path: str | os.PathLike[str] | bytes,
) -> tuple[BoundaryPrefix, tuple[str, ...]] | None:
    """Return ``(prefix, remainder)`` if *path* crosses a /proc boundary.

    The match is purely syntactic: a hit says nothing about whether the
    process exists or is accessible.
    """
    absolute, parts = split_components(path)
    if not absolute or len(parts) < 3 or parts[0] != _PROC:
        return None

    process_token = parts[1]
    if process_token not in _SELF_TOKENS and not _is_numeric_token(process_token):
        return None

    selector = parts[2]
    if selector in (BoundaryKind.ROOT.value, BoundaryKind.CWD.value):
        return BoundaryPrefix(process_token, BoundaryKind(selector)), parts[3:]

    if selector != _TASK or len(parts) < 5:
        return None

    thread_token, kind = parts[3], parts[4]
    if not _is_numeric_token(thread_token):
        return None
    if kind not in (BoundaryKind.ROOT.value, BoundaryKind.CWD.value):
        return None
    return BoundaryPrefix(process_token, BoundaryKind(kind), thread_token), parts[5:]


def is_proc_magic_path(path: str | os.PathLike[str] | bytes) -> bool:
    return find_namespace_boundary(path) is not None
