"""
Provisioning errors — the typed failure taxonomy.

Every fatal condition raised by a pipeline step is a ``ProvisionError``
subclass.  The orchestrator catches exactly this base class, records the
failing step, and halts.  Anything else is a bug and propagates.

``LinkCreationWarning`` is the only non-fatal condition.  It is never
raised out of the pipeline; its text travels on a ``warning`` receipt.
"""

from __future__ import annotations


class ProvisionError(Exception):
    """Base class for fatal provisioning failures."""

    exit_code: int = 1

    def __init__(self, message: str, *, detail: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.step: str | None = None    # set by the orchestrator

    @property
    def kind(self) -> str:
        """Short error name used in reports (the class name)."""
        return type(self).__name__


class InsufficientPrivilege(ProvisionError):
    """Not running with effective uid 0."""


class UnsupportedEnvironment(ProvisionError):
    """No known package manager on the search path."""


class DependencyInstallFailure(ProvisionError):
    """A package-manager update/install command exited non-zero."""


class MissingRuntime(ProvisionError):
    """No ``java`` executable on the search path."""


class VersionTooLow(ProvisionError):
    """The Java major version is below the required minimum."""

    def __init__(self, message: str, *, found: int, required: int) -> None:
        super().__init__(message)
        self.found = found
        self.required = required


class VersionParseError(ProvisionError):
    """``java -version`` output could not be parsed."""


class DownloadFailure(ProvisionError):
    """The release archive could not be downloaded."""


class ExtractionFailure(ProvisionError):
    """The release archive could not be unpacked or installed."""


class SecondaryInstallFailure(ProvisionError):
    """Cloning or pip-installing the secondary package failed."""


class LinkCreationWarning(UserWarning):
    """Entry-point links did not make the command resolvable."""
