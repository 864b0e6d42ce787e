"""Shared fixtures: a kubeconfig on disk and a runtime wired with fakes."""

from __future__ import annotations

from pathlib import Path

import pytest
from fakes import FakeEditor, FakeNamespaceLister, FakePicker, make_kubeconfig, write_kubeconfig

from kubeswitch.config import SwitchConfig
from kubeswitch.runtime import Runtime
from kubeswitch.store import ConfigStore


@pytest.fixture
def kubeconfig_path(tmp_path: Path) -> Path:
    """A kubeconfig with contexts dev and prod (namespace default), dev current."""
    return write_kubeconfig(tmp_path / ".kube" / "config", make_kubeconfig(current="dev"))


@pytest.fixture
def picker() -> FakePicker:
    return FakePicker()


@pytest.fixture
def editor() -> FakeEditor:
    return FakeEditor()


@pytest.fixture
def namespace_lister() -> FakeNamespaceLister:
    return FakeNamespaceLister(["default", "kube-system", "team-a"])


@pytest.fixture
def runtime(
    kubeconfig_path: Path,
    picker: FakePicker,
    editor: FakeEditor,
    namespace_lister: FakeNamespaceLister,
) -> Runtime:
    return Runtime(
        store=ConfigStore(kubeconfig_path),
        picker=picker,
        editor=editor,
        namespaces=namespace_lister,
        settings=SwitchConfig(kubeconfig=kubeconfig_path, picker="fzf", editor=None, log_level="warning"),
    )
