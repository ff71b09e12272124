"""proc-canonicalize - path canonicalization that preserves /proc namespace boundaries."""

from .boundary import BoundaryKind, BoundaryPrefix, find_namespace_boundary, is_proc_magic_path
from .canonical import (
    Canonicalizer,
    NamespaceAwareCanonicalizer,
    PassthroughCanonicalizer,
    canonicalize,
    canonicalize_path,
    default_canonicalizer,
)
from .config import ResolverConfig, load_config
from .errors import ErrorKind, classify_error
from .scanner import MAX_SYMLINK_FOLLOWS

__all__ = [
    "MAX_SYMLINK_FOLLOWS",
    "BoundaryKind",
    "BoundaryPrefix",
    "Canonicalizer",
    "ErrorKind",
    "NamespaceAwareCanonicalizer",
    "PassthroughCanonicalizer",
    "ResolverConfig",
    "canonicalize",
    "canonicalize_path",
    "classify_error",
    "default_canonicalizer",
    "find_namespace_boundary",
    "is_proc_magic_path",
    "load_config",
]
