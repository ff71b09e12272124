"""Boundary-preserving path canonicalization.

canonicalize() behaves like ``os.path.realpath(path, strict=True)`` except
that on Linux it keeps ``/proc/<pid>/root`` and ``/proc/<pid>/cwd`` prefixes:

    >>> os.path.realpath("/proc/self/root")
    '/'
    >>> canonicalize("/proc/self/root")
    '/proc/self/root'

Paths that only reach such a boundary through ordinary symlinks are rewritten
onto the boundary as well. Paths that resolve outside the boundary's real
subtree come back as plain host paths.

Known limitation: boundaries created with bind mounts are not detected, since
that would require reading the live mount table.
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path

from .boundary import find_namespace_boundary
from .config import ResolverConfig
from .host import _IS_WINDOWS, HostFilesystem, has_proc_namespaces, simplify_extended_path
from .resolver import resolve_through_boundary
from .scanner import SymlinkBudget, find_indirect_boundary

logger = logging.getLogger(__name__)


class Canonicalizer:
    """Resolve paths to canonical absolute form."""

    def __init__(self, host: HostFilesystem | None = None, config: ResolverConfig | None = None) -> None:
        self.host = host or HostFilesystem()
        self.config = config or ResolverConfig()

    def canonicalize(self, path: str | os.PathLike[str] | bytes) -> str:
        raise NotImplementedError


class NamespaceAwareCanonicalizer(Canonicalizer):
    """Canonicalizer for platforms with /proc magic links."""

    def canonicalize(self, path: str | os.PathLike[str] | bytes) -> str:
        raw = os.fsdecode(path)
        if not raw:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), raw)

        budget = SymlinkBudget(limit=self.config.max_symlink_follows)
        candidate = raw
        # The scanner only returns paths the matcher accepts, so the second
        # pass always ends in the resolver.
        while True:
            match = find_namespace_boundary(candidate)
            if match is not None:
                prefix, remainder = match
                logger.debug("Namespace boundary %s in %s", prefix, candidate)
                return resolve_through_boundary(prefix, remainder, self.host).path

            found = find_indirect_boundary(candidate, self.host, budget)
            if found is None:
                break
            logger.debug("%s reaches namespace boundary via symlink: %s", candidate, found)
            candidate = found

        return self.host.realpath(candidate)


class PassthroughCanonicalizer(Canonicalizer):
    """Plain resolution for platforms without /proc namespaces."""

    def __init__(
        self,
        host: HostFilesystem | None = None,
        config: ResolverConfig | None = None,
        *,
        simplify: bool | None = None,
    ) -> None:
        super().__init__(host, config)
        if simplify is None:
            simplify = _IS_WINDOWS and self.config.simplify_windows_paths
        self.simplify = simplify

    def canonicalize(self, path: str | os.PathLike[str] | bytes) -> str:
        resolved = self.host.realpath(os.fsdecode(path))
        if self.simplify:
            return simplify_extended_path(resolved)
        return resolved


def default_canonicalizer(
    config: ResolverConfig | None = None,
    host: HostFilesystem | None = None,
) -> Canonicalizer:
    """Pick the canonicalizer for the running platform."""
    if has_proc_namespaces():
        return NamespaceAwareCanonicalizer(host, config)
    return PassthroughCanonicalizer(host, config)


def canonicalize(path: str | os.PathLike[str] | bytes) -> str:
    """Canonicalize *path*, preserving /proc namespace boundaries on Linux.

    Raises FileNotFoundError, PermissionError or another OSError (ELOOP for
    symlink cycles) exactly as the underlying filesystem reports them.
    """
    return default_canonicalizer().canonicalize(path)


def canonicalize_path(path: str | os.PathLike[str] | bytes) -> Path:
    """Like canonicalize(), returning a Path."""
    return Path(canonicalize(path))
