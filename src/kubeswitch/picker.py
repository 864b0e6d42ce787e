"""Interactive selection through an external fuzzy finder."""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import structlog

from kubeswitch.errors import PickerError, PickerUnavailableError

log = structlog.get_logger()

# fzf exit statuses
_NO_MATCH = 1
_FZF_ERROR = 2
_INTERRUPTED = 130


class Picker(Protocol):
    def choose(self, candidates: Sequence[str]) -> int:
        """Return the index of the candidate the operator picked."""
        ...


def _describe_exit(program: str, returncode: int) -> str:
    if returncode == _NO_MATCH:
        return f"{program}: no match found"
    if returncode == _FZF_ERROR:
        return f"{program} returned an error"
    if returncode == _INTERRUPTED:
        return f"{program} canceled"
    if returncode < 0 or returncode > 128:
        return f"{program} was terminated"
    return f"{program} exited with status {returncode}"


def _split_command(command: str) -> list[str]:
    try:
        argv = shlex.split(command)
    except ValueError as exc:
        msg = f"Invalid picker command {command!r}: {exc}"
        raise PickerUnavailableError(msg) from exc
    if not argv:
        msg = "Picker command is empty, set KUBESWITCH_PICKER to a fuzzy finder such as fzf"
        raise PickerUnavailableError(msg)
    return argv


@dataclass(frozen=True)
class FzfPicker:
    """Feeds candidates to a fuzzy finder on stdin and reads the chosen line back.

    The finder draws its UI on the terminal itself, so only stdout is captured.
    """

    command: str = "fzf"

    def choose(self, candidates: Sequence[str]) -> int:
        argv = _split_command(self.command)
        program = argv[0]
        log.debug("picker_started", command=self.command, candidates=len(candidates))
        try:
            result = subprocess.run(
                argv,
                input="".join(f"{item}\n" for item in candidates),
                stdout=subprocess.PIPE,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            msg = f"{program} has not been installed in your system, please install it first"
            raise PickerUnavailableError(msg) from exc
        except OSError as exc:
            msg = f"Launch {program}: {exc}"
            raise PickerError(msg) from exc

        if result.returncode != 0:
            raise PickerError(_describe_exit(program, result.returncode))

        chosen = result.stdout.strip()
        for idx, item in enumerate(candidates):
            if item == chosen:
                return idx

        msg = f"Cannot find {chosen!r} from {program} result"
        raise PickerError(msg)
