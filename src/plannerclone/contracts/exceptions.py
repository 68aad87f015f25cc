"""Exception hierarchy for plannerclone."""

from __future__ import annotations


class PlannerCloneError(Exception):
    """Base exception for all plannerclone errors."""


class ConfigError(PlannerCloneError):
    """Configuration loading or validation failure."""


class ProviderError(PlannerCloneError):
    """Base provider operation failure."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(ProviderError):
    """No usable authenticated session."""


class ResourceNotFoundError(ProviderError):
    """The requested plan, bucket, task or detail record does not exist."""


class ConcurrencyTokenError(ProviderError):
    """A conditional update was rejected because its concurrency token is stale."""


class AttachmentValidationError(PlannerCloneError):
    """An attachment reference key does not decode to an absolute URL."""

    def __init__(self, message: str, *, alias: str, key: str) -> None:
        super().__init__(message)
        self.alias = alias
        self.key = key


class SnapshotError(PlannerCloneError):
    """The source plan could not be read into a snapshot."""


class CloneError(PlannerCloneError):
    """Engine-level replication failure that aborts the whole run."""
