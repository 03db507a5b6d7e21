"""Deterministic in-memory account service for tests and offline workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from account_state.errors import AccountNotFoundError
from account_state.service import AccountService
from account_state.types import Cloud, CloudAccount, User


@dataclass
class InMemoryAccountService(AccountService):
    accounts: dict[Cloud, list[CloudAccount]] = field(default_factory=dict)
    users: list[User] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    service_account_name: str | None = None

    def enabled_features(self) -> list[str]:
        return list(self.features)

    def cloud_account(self, cloud: Cloud, account_id: UUID) -> CloudAccount:
        for account in self.accounts.get(cloud, []):
            if account.id == account_id:
                return account
        raise AccountNotFoundError(f"{cloud} account {account_id} not found")

    def cloud_account_by_native_id(self, cloud: Cloud, native_id: str) -> CloudAccount:
        for account in self.accounts.get(cloud, []):
            if account.native_id == native_id:
                return account
        raise AccountNotFoundError(f"{cloud} account {native_id!r} not found")

    def user_by_email(self, email: str) -> User:
        for user in self.users:
            if user.email == email:
                return user
        raise AccountNotFoundError(f"user with email {email!r} not found")

    def gcp_service_account(self) -> str:
        if self.service_account_name is None:
            raise AccountNotFoundError("no default GCP service account")
        return self.service_account_name
