"""Detection of ordinary symlinks that lead into a /proc namespace boundary.

``/tmp/container -> /proc/1234/root`` does not look like a boundary, yet
resolving ``/tmp/container/etc`` naively yields the host's ``/etc``. The
scanner simulates the walk the kernel would do, one component at a time, and
reports the reconstructed boundary path as soon as one appears.

The walk cannot normalise first: collapsing ``link/..`` lexically would drop
``link`` before anyone looked at what it points to.
"""

from __future__ import annotations

import logging
import posixpath
import stat
from dataclasses import dataclass

from .boundary import PARENT, ROOT_MARKER, is_proc_magic_path, join_components, split_components
from .host import HostFilesystem

logger = logging.getLogger(__name__)

# Linux MAXSYMLINKS.
MAX_SYMLINK_FOLLOWS = 40


@dataclass
class SymlinkBudget:
    """Symlink follows left for one top-level resolution."""

    limit: int = MAX_SYMLINK_FOLLOWS
    used: int = 0

    @property
    def exhausted(self) -> bool:
        return self.used >= self.limit

    def spend(self) -> None:
        self.used += 1


def find_indirect_boundary(
    path: str,
    host: HostFilesystem,
    budget: SymlinkBudget,
) -> str | None:
    """Return the boundary path *path* eventually designates, if any.

    Returns None when no boundary is involved or when the budget runs out; in
    the latter case the plain resolution that follows will report the loop.
    The budget is checked when the next symlink would be followed, so plain
    segments after the last allowed follow are still walked.
    Errors other than FileNotFoundError from probing a component propagate.
    """
    current = path if posixpath.isabs(path) else posixpath.join(host.getcwd(), path)

    while True:
        if is_proc_magic_path(current):
            return current

        _, components = split_components(current)
        accumulated: list[str] = []
        substituted = False

        for index, name in enumerate(components):
            if name == PARENT:
                if accumulated:
                    accumulated.pop()
                # Stepping out of a subdirectory can land exactly on a boundary.
                candidate = join_components(ROOT_MARKER, accumulated)
                if is_proc_magic_path(candidate):
                    return join_components(candidate, components[index + 1:])
                continue

            link = join_components(ROOT_MARKER, accumulated + [name])
            # /proc/<pid>/root is itself a symlink to "/"; following it would
            # lose the boundary.
            if is_proc_magic_path(link):
                return join_components(link, components[index + 1:])
            try:
                info = host.lstat(link)
            except FileNotFoundError:
                accumulated.append(name)
                continue

            if stat.S_ISLNK(info.st_mode):
                if budget.exhausted:
                    logger.debug("Symlink budget of %d exhausted at %s while scanning %s", budget.limit, link, path)
                    return None
                budget.spend()
                target = host.readlink(link)
                if not posixpath.isabs(target):
                    target = posixpath.join(join_components(ROOT_MARKER, accumulated), target)
                logger.debug("Following %s -> %s (%d/%d)", link, target, budget.used, budget.limit)
                current = join_components(target, components[index + 1:])
                substituted = True
                break

            accumulated.append(name)

        if substituted:
            continue

        resolved = join_components(ROOT_MARKER, accumulated)
        if is_proc_magic_path(resolved):
            return resolved
        return None
