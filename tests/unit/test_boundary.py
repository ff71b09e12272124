"""Tests for proc_canonicalize.boundary — lexical /proc boundary matching."""

from __future__ import annotations

from pathlib import Path

import pytest

from proc_canonicalize.boundary import (
    BoundaryKind,
    BoundaryPrefix,
    find_namespace_boundary,
    is_proc_magic_path,
    join_components,
    split_components,
)


class TestSplitComponents:
    def test_absolute(self) -> None:
        assert split_components("/proc/self/root") == (True, ("proc", "self", "root"))

    def test_relative(self) -> None:
        assert split_components("proc/self/root") == (False, ("proc", "self", "root"))

    def test_drops_dot_and_empty_segments(self) -> None:
        assert split_components("//proc/./self//root/") == (True, ("proc", "self", "root"))

    def test_keeps_parent_references(self) -> None:
        assert split_components("/a/../b") == (True, ("a", "..", "b"))

    def test_accepts_pathlike_and_bytes(self) -> None:
        assert split_components(Path("/a/b")) == (True, ("a", "b"))
        assert split_components(b"/a/b") == (True, ("a", "b"))


class TestJoinComponents:
    def test_root_base(self) -> None:
        assert join_components("/", ["etc", "passwd"]) == "/etc/passwd"

    def test_nested_base(self) -> None:
        assert join_components("/proc/self/root", ("etc",)) == "/proc/self/root/etc"

    def test_no_components(self) -> None:
        assert join_components("/proc/self/root", ()) == "/proc/self/root"


class TestBoundaryPrefix:
    def test_path_for_process(self) -> None:
        assert BoundaryPrefix("1234", BoundaryKind.ROOT).path == "/proc/1234/root"

    def test_path_for_task(self) -> None:
        prefix = BoundaryPrefix("1234", BoundaryKind.CWD, thread_token="5678")
        assert prefix.path == "/proc/1234/task/5678/cwd"

    def test_join(self) -> None:
        prefix = BoundaryPrefix("self", BoundaryKind.ROOT)
        assert prefix.join(("etc", "hostname")) == "/proc/self/root/etc/hostname"
        assert str(prefix) == "/proc/self/root"


class TestFindNamespaceBoundary:
    def test_pid_root(self) -> None:
        prefix, remainder = find_namespace_boundary("/proc/1234/root/etc/passwd")
        assert prefix.path == "/proc/1234/root"
        assert remainder == ("etc", "passwd")

    def test_pid_cwd(self) -> None:
        prefix, remainder = find_namespace_boundary("/proc/5678/cwd/some/file.txt")
        assert prefix.path == "/proc/5678/cwd"
        assert prefix.kind is BoundaryKind.CWD
        assert remainder == ("some", "file.txt")

    def test_self_root(self) -> None:
        prefix, remainder = find_namespace_boundary("/proc/self/root/etc/passwd")
        assert prefix.path == "/proc/self/root"
        assert remainder == ("etc", "passwd")

    def test_thread_self_root(self) -> None:
        prefix, remainder = find_namespace_boundary("/proc/thread-self/root/app/config")
        assert prefix.path == "/proc/thread-self/root"
        assert remainder == ("app", "config")

    def test_task_root(self) -> None:
        prefix, remainder = find_namespace_boundary("/proc/1234/task/1240/root/etc")
        assert prefix == BoundaryPrefix("1234", BoundaryKind.ROOT, thread_token="1240")
        assert remainder == ("etc",)

    def test_self_task_cwd(self) -> None:
        prefix, remainder = find_namespace_boundary("/proc/self/task/99/cwd")
        assert prefix.path == "/proc/self/task/99/cwd"
        assert remainder == ()

    def test_prefix_only_has_empty_remainder(self) -> None:
        prefix, remainder = find_namespace_boundary("/proc/1234/root")
        assert prefix.path == "/proc/1234/root"
        assert remainder == ()

    def test_trailing_slash(self) -> None:
        prefix, remainder = find_namespace_boundary("/proc/1234/root/")
        assert prefix.path == "/proc/1234/root"
        assert remainder == ()

    def test_dot_components(self) -> None:
        prefix, remainder = find_namespace_boundary("/proc/./1234/./root/./etc")
        assert prefix.path == "/proc/1234/root"
        assert remainder == ("etc",)

    def test_double_slashes(self) -> None:
        prefix, _ = find_namespace_boundary("//proc//self//root")
        assert prefix.path == "/proc/self/root"

    def test_remainder_keeps_parent_reference(self) -> None:
        _, remainder = find_namespace_boundary("/proc/self/cwd/..")
        assert remainder == ("..",)

    def test_long_numeric_pid(self) -> None:
        assert is_proc_magic_path("/proc/" + "9" * 40 + "/root")

    def test_pid_zero(self) -> None:
        assert is_proc_magic_path("/proc/0/root")

    def test_leading_zeros(self) -> None:
        assert is_proc_magic_path("/proc/0001234/root")

    @pytest.mark.parametrize(
        "path",
        [
            "/home/user/file.txt",
            "/proc/1234/status",
            "/proc/1234/exe",
            "/proc/1234/fd/0",
            "/proc/1234",
            "/proc",
            "/",
            "proc/1234/root",
            "proc/self/root",
            "/proc/abc/root",
            "/proc/123abc/root",
            "/proc//root",
            "/proc/-1/root",
            "/proc/+1/root",
            "/proc/1.0/root",
            "/proc/١٢/root",
            "/proc/SELF/root",
            "/proc/Self/root",
            "/proc/self-thread/root",
            "/PROC/self/root",
            "/Proc/self/root",
            "/proc/self/ROOT",
            "/proc/self/Cwd",
            "/proc/self/task",
            "/proc/self/task/abc/root",
            "/proc/self/task/self/root",
            "/proc/self/task/12",
            "/proc/self/task/12/exe",
            "/proc/../proc/self/root",
            "/tmp/proc/self/root",
        ],
    )
    def test_rejects(self, path: str) -> None:
        assert find_namespace_boundary(path) is None
        assert not is_proc_magic_path(path)

    def test_never_touches_filesystem(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _boom(*args: object, **kwargs: object) -> None:
            raise AssertionError("filesystem access")

        monkeypatch.setattr("os.stat", _boom)
        monkeypatch.setattr("os.lstat", _boom)
        assert is_proc_magic_path("/proc/4294967295/root/etc")
