"""Resolution of paths that lexically cross a /proc namespace boundary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from .boundary import BoundaryPrefix, split_components
from .host import HostFilesystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Contained:
    """The real path stayed under the boundary; report it through the prefix."""

    prefix: BoundaryPrefix
    suffix: tuple[str, ...] = ()

    @property
    def path(self) -> str:
        return self.prefix.join(self.suffix)


@dataclass(frozen=True)
class Escaped:
    """The real path left the boundary's subtree; no prefix applies."""

    path: str


ResolutionOutcome = Union[Contained, Escaped]


def _relative_suffix(resolved: str, base: str) -> tuple[str, ...] | None:
    """Components of *resolved* below *base*, or None if it is not below it."""
    _, resolved_parts = split_components(resolved)
    _, base_parts = split_components(base)
    if resolved_parts[: len(base_parts)] != base_parts:
        return None
    return resolved_parts[len(base_parts):]


def resolve_through_boundary(
    prefix: BoundaryPrefix,
    remainder: tuple[str, ...],
    host: HostFilesystem,
) -> ResolutionOutcome:
    """Resolve ``prefix/remainder`` without losing the namespace prefix.

    The prefix is probed with stat() first so a missing process and an
    inaccessible one surface as FileNotFoundError and PermissionError
    respectively.

    A path is only reported as Contained when its fully resolved location is
    the prefix's real location or a descendant of it. Anything else, e.g. an
    absolute symlink pointing elsewhere or ``..`` above a cwd boundary, is
    Escaped and returned as the plain host path.
    """
    host.stat(prefix.path)

    if not remainder:
        return Contained(prefix)

    # /proc/<pid>/root is not necessarily "/" (containers) and
    # /proc/<pid>/cwd almost never is.
    resolved_prefix = host.realpath(prefix.path)
    resolved = host.realpath(prefix.join(remainder))

    suffix = _relative_suffix(resolved, resolved_prefix)
    if suffix is None:
        logger.debug("Path escaped %s: %s is outside %s", prefix, resolved, resolved_prefix)
        return Escaped(resolved)

    logger.debug("Path contained in %s: %s", prefix, resolved)
    return Contained(prefix, suffix)
