# mirrorsync Provider Errors
# Exceptions raised while starting and waiting for sync jobs

from typing import Optional


class ProviderError(Exception):
    """Base exception for sync job failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AlreadyRunningError(ProviderError):
    """Raised when a job is started while a previous run is still in flight."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"provider {name} is currently running")


class CommandError(ProviderError):
    """Exception raised when a sync command exits unsuccessfully."""

    def __init__(self, message: str, returncode: int = 1, command: Optional[list[str]] = None):
        self.returncode = returncode
        self.command = command or []
        super().__init__(message)
