"""Typed errors for state migration and the account-management collaborator."""

from __future__ import annotations


class StateMigrationError(RuntimeError):
    """Base error for identifier and schema-migration failures."""


class MalformedIdentifier(StateMigrationError):
    """Raised when an identifier does not match its expected format."""


class LadderGap(StateMigrationError):
    """Raised when upgrade steps do not form a contiguous version ladder."""


class UnsupportedFutureVersion(StateMigrationError):
    """Raised when stored state was written by a newer schema version."""

    def __init__(self, resource_type: str, stored_version: int, current_version: int) -> None:
        super().__init__(
            f"{resource_type} state has schema version {stored_version}, "
            f"newer than supported version {current_version}; upgrade the tool"
        )
        self.resource_type = resource_type
        self.stored_version = stored_version
        self.current_version = current_version


class InvalidStoredVersion(StateMigrationError):
    """Raised when the stored schema version is not a non-negative integer."""


class UnknownResourceType(StateMigrationError):
    """Raised when no ladder is registered for a resource type."""


class StepFailure(StateMigrationError):
    """Raised when a single upgrade step fails; wraps the original cause."""

    def __init__(self, resource_type: str, from_version: int, cause: Exception) -> None:
        super().__init__(
            f"{resource_type} state upgrade from version {from_version} "
            f"to {from_version + 1} failed: {cause}"
        )
        self.resource_type = resource_type
        self.from_version = from_version
        self.cause = cause


class AccountServiceError(RuntimeError):
    """Base error for account-management service failures."""


class AccountServiceTransportError(AccountServiceError):
    """Raised when the HTTP transport to the account service fails."""


class AccountServiceResponseError(AccountServiceError):
    """Raised when the account service returns an invalid response payload."""


class AccountNotFoundError(AccountServiceError):
    """Raised when the requested account, user or object does not exist."""


class AccountServiceUnavailableError(AccountServiceError):
    """Raised when a step needs the account service but none is configured."""
