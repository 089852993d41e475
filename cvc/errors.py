from __future__ import annotations

from .rules import ExitStatus


class CvcError(Exception):
    """Base error; carries the process exit status it maps to."""

    status: ExitStatus = ExitStatus.ERROR_UNSPECIFIC

    def __init__(self, message: str, status: ExitStatus | None = None):
        super().__init__(message)
        if status is not None:
            self.status = status


class ConfigurationError(CvcError):
    status = ExitStatus.ERROR_PARAMETER


class InputError(CvcError):
    status = ExitStatus.ERROR_INPUT
