"""Interface for the account-management service consumed by upgrade steps."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from account_state.types import Cloud, CloudAccount, User


class AccountService(Protocol):
    def enabled_features(self) -> list[str]:
        """Return the feature names enabled for the current account."""

    def cloud_account(self, cloud: Cloud, account_id: UUID) -> CloudAccount:
        """Return the cloud account with the given cloud account id."""

    def cloud_account_by_native_id(self, cloud: Cloud, native_id: str) -> CloudAccount:
        """Return the cloud account with the given AWS, Azure or GCP id."""

    def user_by_email(self, email: str) -> User:
        """Return the local user with the given email address."""

    def gcp_service_account(self) -> str:
        """Return the name of the default GCP service account."""
