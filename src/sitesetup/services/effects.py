"""Side-effecting primitives: a real executor and a dry-run announcer."""

from __future__ import annotations

import shlex
import shutil
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping, Protocol

from rich.console import Console

from sitesetup.errors import CommandFailed, FilesystemError

_SED_SPECIAL = "/&#\\"


def escape_sed_replacement(value: str) -> str:
    """Backslash-escape the characters sed treats specially in ``s/.../<here>/``."""
    return "".join(f"\\{ch}" if ch in _SED_SPECIAL else ch for ch in value)


def sed_expressions(values: Mapping[str, str]) -> list[str]:
    args: list[str] = []
    for placeholder, value in values.items():
        args.extend(["-e", f"s/{placeholder}/{escape_sed_replacement(value)}/g"])
    return args


def _run(cmd: list[str], *, check: bool = True, capture: bool = True) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(
            cmd,
            check=check,
            capture_output=capture,
            text=True,
        )
    except subprocess.CalledProcessError as exc:
        message = f"Command failed: {shlex.join(cmd)}"
        if exc.stderr:
            message += f"\nstderr: {exc.stderr.strip()}"
        raise CommandFailed(message) from exc
    except FileNotFoundError as exc:
        raise CommandFailed(f"Command failed: {shlex.join(cmd)}\n{exc}") from exc


@contextmanager
def _filesystem(action: str, path: Path) -> Iterator[None]:
    try:
        yield
    except OSError as exc:
        raise FilesystemError(f"Cannot {action} {path}: {exc.strerror or exc}") from exc


class Effects(Protocol):
    def make_dirs(self, path: Path) -> None: ...

    def copy_tree(self, src: Path, dst: Path) -> None: ...

    def copy_file(self, src: Path, dst: Path) -> None: ...

    def replace_placeholders(self, path: Path, values: Mapping[str, str]) -> None: ...

    def symlink(self, target: Path, link: Path) -> None: ...

    def run(self, cmd: list[str]) -> None: ...


class SystemEffects:
    """Performs every operation for real."""

    def make_dirs(self, path: Path) -> None:
        with _filesystem("create directory", path):
            path.mkdir(parents=True, exist_ok=True)

    def copy_tree(self, src: Path, dst: Path) -> None:
        with _filesystem(f"copy {src} to", dst):
            shutil.copytree(src, dst, dirs_exist_ok=True)

    def copy_file(self, src: Path, dst: Path) -> None:
        with _filesystem(f"copy {src} to", dst):
            shutil.copyfile(src, dst)

    def replace_placeholders(self, path: Path, values: Mapping[str, str]) -> None:
        backup = path.with_name(path.name + ".bak")
        _run(["sed", "-i.bak", *sed_expressions(values), str(path)])
        with _filesystem("remove", backup):
            backup.unlink(missing_ok=True)

    def symlink(self, target: Path, link: Path) -> None:
        with _filesystem("create symlink", link):
            link.symlink_to(target)

    def run(self, cmd: list[str]) -> None:
        _run(cmd, capture=False)


class DryRunEffects:
    """Announces each operation instead of performing it."""

    def __init__(self, console: Console):
        self.console = console

    def _announce(self, *parts: str) -> None:
        self.console.print(f"[dry-run] {shlex.join(parts)}", markup=False, highlight=False)

    def make_dirs(self, path: Path) -> None:
        self._announce("mkdir", "-p", str(path))

    def copy_tree(self, src: Path, dst: Path) -> None:
        self._announce("cp", "-R", f"{src}/.", f"{dst}/")

    def copy_file(self, src: Path, dst: Path) -> None:
        self._announce("cp", str(src), str(dst))

    def replace_placeholders(self, path: Path, values: Mapping[str, str]) -> None:
        self.console.print(f"[dry-run] render template {path}", markup=False, highlight=False)

    def symlink(self, target: Path, link: Path) -> None:
        self._announce("ln", "-s", str(target), str(link))

    def run(self, cmd: list[str]) -> None:
        self._announce(*cmd)
