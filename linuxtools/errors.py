"""
Exception taxonomy for linux-tools.

PreconditionError and its subclasses stop single actions: the CLI prints
the message and exits 1. Multi-step runs (recommended order, remote script
selection) record them against the current step and move on, as they do
with FetchError. Non-zero script exits and user cancellation are not
exceptions.
"""


class LinuxToolsError(Exception):
    """Base exception for linux-tools errors."""


class PreconditionError(LinuxToolsError):
    """Raised when a required tool or privilege is missing."""


class DownloaderMissingError(PreconditionError):
    """Raised when neither curl nor wget is available."""


class PrivilegeError(PreconditionError):
    """Raised when root is required and sudo is unavailable."""


class FetchError(LinuxToolsError):
    """Raised when a single script could not be downloaded."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason
