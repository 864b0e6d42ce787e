"""Exceptions raised by kubeswitch commands.

Every error the CLI reports derives from :class:`KubeSwitchError`; the message
is shown to the operator as a single line.
"""

from __future__ import annotations


class KubeSwitchError(Exception):
    """Base class for all operator-facing failures."""


class ConfigError(KubeSwitchError):
    """A kubeconfig, alias, or edited document could not be read or written."""


class EmptyConfigError(KubeSwitchError):
    """The kubeconfig holds no contexts."""


class NotFoundError(KubeSwitchError):
    """A named context does not exist."""


class NoPriorSelectionError(KubeSwitchError):
    """``-`` was requested but nothing has been switched away from yet."""


class NoCurrentContextError(KubeSwitchError):
    """No context is marked current."""


class NoNamespacesError(KubeSwitchError):
    """Neither the alias table nor the cluster offered a namespace."""


class BackendUnavailableError(KubeSwitchError):
    """The live namespace listing against the cluster failed."""


class InvalidEditError(KubeSwitchError):
    """The edited document does not hold exactly one cluster and one user."""


class InvalidNameError(KubeSwitchError, ValueError):
    """An operator-supplied name is not acceptable."""


class PickerError(KubeSwitchError):
    """The interactive picker failed or returned an unknown line."""


class PickerUnavailableError(PickerError):
    """The picker program is not installed."""


class EditorError(KubeSwitchError):
    """The editor exited with an error."""


class EditorUnavailableError(EditorError):
    """No editor is configured."""
