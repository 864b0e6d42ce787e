"""Tests for the external editor and the merge-file source."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from kubeswitch.editor import ExternalEditor, MergeFileSource
from kubeswitch.errors import ConfigError, EditorError, EditorUnavailableError


def _fake_editor(new_text: str, returncode: int = 0) -> Any:
    """Stand-in for subprocess.run that rewrites the file passed as last argument."""
    seen: dict[str, str] = {}

    def run(argv: list[str], check: bool = False) -> MagicMock:
        path = Path(argv[-1])
        seen["path"] = str(path)
        seen["before"] = path.read_text()
        path.write_text(new_text)
        result = MagicMock()
        result.returncode = returncode
        return result

    run.seen = seen  # type: ignore[attr-defined]
    return run


class TestExternalEditor:
    def test_missing_editor(self) -> None:
        with pytest.raises(EditorUnavailableError, match="Missing env EDITOR"):
            ExternalEditor(command=None).edit("doc")

    def test_returns_edited_text(self) -> None:
        run = _fake_editor("edited: true\n")
        notes: list[str] = []
        with patch("kubeswitch.editor.subprocess.run", side_effect=run):
            result = ExternalEditor(command="vim", notify=notes.append).edit("original: 1\n")

        assert result == "edited: true\n"
        assert run.seen["before"] == "original: 1\n"
        assert Path(run.seen["path"]).name.startswith("edit-kubeconfig-")
        assert Path(run.seen["path"]).suffix == ".yaml"
        assert notes == ["Use editor 'vim' to edit kube config content."]

    def test_temp_file_removed(self) -> None:
        run = _fake_editor("x: 1\n")
        with patch("kubeswitch.editor.subprocess.run", side_effect=run):
            ExternalEditor(command="vim").edit("")
        assert not Path(run.seen["path"]).exists()

    def test_command_with_arguments(self) -> None:
        run = _fake_editor("")
        with patch("kubeswitch.editor.subprocess.run", side_effect=run) as mock_run:
            ExternalEditor(command="code --wait").edit("")
        argv = mock_run.call_args.args[0]
        assert argv[:2] == ["code", "--wait"]
        assert argv[2] == run.seen["path"]

    def test_non_zero_exit(self) -> None:
        run = _fake_editor("", returncode=1)
        with patch("kubeswitch.editor.subprocess.run", side_effect=run):
            with pytest.raises(EditorError, match="exit status 1"):
                ExternalEditor(command="vim").edit("")
        assert not Path(run.seen["path"]).exists()

    @pytest.mark.parametrize("command", ["", "   "])
    def test_blank_editor(self, command: str) -> None:
        with patch("kubeswitch.editor.subprocess.run") as mock_run:
            with pytest.raises(EditorUnavailableError, match="Missing env EDITOR"):
                ExternalEditor(command=command).edit("doc")
        mock_run.assert_not_called()

    def test_unbalanced_quote(self) -> None:
        with pytest.raises(EditorUnavailableError, match="Invalid EDITOR"):
            ExternalEditor(command="vim '-c").edit("doc")

    def test_permission_error_is_editor_error(self) -> None:
        with patch("kubeswitch.editor.subprocess.run", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(EditorError, match="Launch editor"):
                ExternalEditor(command="vim").edit("")

    def test_editor_not_found(self) -> None:
        with patch("kubeswitch.editor.subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(EditorUnavailableError, match="not found"):
                ExternalEditor(command="nope").edit("")


class TestMergeFileSource:
    def test_returns_file_content(self, tmp_path: Path) -> None:
        path = tmp_path / "merge.yaml"
        path.write_text("clusters: []\n")
        assert MergeFileSource(path).edit("ignored") == "clusters: []\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Read merge file"):
            MergeFileSource(tmp_path / "missing.yaml").edit("")
