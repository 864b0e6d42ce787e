"""Editing a single-cluster kubeconfig document outside the process."""

from __future__ import annotations

import os
import shlex
import subprocess
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import structlog

from kubeswitch.errors import ConfigError, EditorError, EditorUnavailableError

log = structlog.get_logger()


class Editor(Protocol):
    def edit(self, document: str) -> str:
        """Return the edited form of ``document`` (YAML text, possibly empty)."""
        ...


@dataclass(frozen=True)
class ExternalEditor:
    """Runs ``$EDITOR`` on a temporary YAML file and reads the result back."""

    command: str | None
    notify: Callable[[str], None] | None = None

    def _split_command(self) -> list[str]:
        try:
            argv = shlex.split(self.command or "")
        except ValueError as exc:
            msg = f"Invalid EDITOR {self.command!r}: {exc}"
            raise EditorUnavailableError(msg) from exc
        if not argv:
            msg = "Missing env EDITOR to edit file"
            raise EditorUnavailableError(msg)
        return argv

    def edit(self, document: str) -> str:
        command = self._split_command()
        if self.notify is not None:
            self.notify(f"Use editor {self.command!r} to edit kube config content.")

        fd, path = tempfile.mkstemp(prefix="edit-kubeconfig-", suffix=".yaml")
        try:
            with os.fdopen(fd, "w") as handle:
                handle.write(document)

            argv = [*command, path]
            log.debug("editor_started", command=self.command, path=path)
            try:
                result = subprocess.run(argv, check=False)
            except FileNotFoundError as exc:
                msg = f"Editor {self.command!r} not found"
                raise EditorUnavailableError(msg) from exc
            except OSError as exc:
                msg = f"Launch editor {self.command!r}: {exc}"
                raise EditorError(msg) from exc
            if result.returncode != 0:
                msg = f"Use editor {self.command!r} to edit temp file failed: exit status {result.returncode}"
                raise EditorError(msg)

            return Path(path).read_text()
        except OSError as exc:
            msg = f"Edit temp file {path}: {exc}"
            raise ConfigError(msg) from exc
        finally:
            if os.path.exists(path):
                os.unlink(path)


@dataclass(frozen=True)
class MergeFileSource:
    """Stands in for an editor session with the contents of a prepared file."""

    path: Path

    def edit(self, document: str) -> str:
        try:
            return self.path.read_text()
        except OSError as exc:
            msg = f"Read merge file {self.path}: {exc}"
            raise ConfigError(msg) from exc
