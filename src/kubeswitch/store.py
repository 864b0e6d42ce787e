"""Kubeconfig persistence and the last-selection marker files."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

import structlog
import yaml

from kubeswitch.config import LAST_CONTEXT_FILENAME, LAST_NAMESPACE_FILENAME
from kubeswitch.errors import ConfigError
from kubeswitch.models import KubeConfig

log = structlog.get_logger()


class LastSelectionMarker:
    """A single durable value stored as the raw content of one file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> str:
        """Return the stored value, or ``""`` when nothing was recorded."""
        try:
            return self.path.read_text()
        except FileNotFoundError:
            return ""
        except OSError as exc:
            msg = f"Read {self.path.name}: {exc}"
            raise ConfigError(msg) from exc

    def write(self, value: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(value)
        except OSError as exc:
            msg = f"Save {self.path.name}: {exc}"
            raise ConfigError(msg) from exc
        log.debug("marker_written", marker=self.path.name, value=value)


class ConfigStore:
    """Loads the kubeconfig file and atomically replaces it.

    Nothing is cached between calls; every ``load`` reads the file again.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def last_context(self) -> LastSelectionMarker:
        return LastSelectionMarker(self._path.parent / LAST_CONTEXT_FILENAME)

    @property
    def last_namespace(self) -> LastSelectionMarker:
        return LastSelectionMarker(self._path.parent / LAST_NAMESPACE_FILENAME)

    def load(self) -> KubeConfig:
        """Read the kubeconfig; a missing file is an empty config.

        Raises:
            ConfigError: If the file cannot be read or parsed.
        """
        try:
            text = self._path.read_text()
        except FileNotFoundError:
            log.debug("kubeconfig_missing", path=str(self._path))
            return KubeConfig()
        except OSError as exc:
            msg = f"Read kubeconfig {self._path}: {exc}"
            raise ConfigError(msg) from exc

        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            msg = f"Parse kubeconfig {self._path}: {exc}"
            raise ConfigError(msg) from exc
        return KubeConfig.from_document(raw)

    def replace(self, config: KubeConfig) -> None:
        """Write ``config`` to a temp file beside the target and rename it into place.

        A symlinked kubeconfig is written through: the link stays and its target
        receives the new content.
        """
        data = yaml.safe_dump(config.to_document(), default_flow_style=False, sort_keys=False)
        tmp_name: str | None = None
        try:
            target = self._path.resolve()
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", dir=target.parent, prefix=".kubeconfig-", suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            if target.exists():
                os.chmod(tmp_name, stat.S_IMODE(target.stat().st_mode))
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            msg = f"Modify config {self._path}: {exc}"
            raise ConfigError(msg) from exc
        log.debug("kubeconfig_written", path=str(self._path), contexts=len(config.contexts))
