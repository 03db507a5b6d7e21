"""Minimal HTTP GraphQL client for the account-management service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

import httpx

from account_state.config import Settings
from account_state.errors import (
    AccountNotFoundError,
    AccountServiceResponseError,
    AccountServiceTransportError,
)
from account_state.service import AccountService
from account_state.types import Cloud, CloudAccount, User

_ENABLED_FEATURES_QUERY = """
query EnabledFeatures {
  allEnabledFeaturesForAccount { features { name } }
}
"""

_CLOUD_ACCOUNT_QUERY = """
query CloudAccount($cloud: CloudVendor!, $filter: CloudAccountFilter!) {
  cloudAccounts(cloud: $cloud, filter: $filter) {
    id nativeId name
    features { feature status }
  }
}
"""

_USER_QUERY = """
query UserByEmail($email: String!) {
  users(filter: {emailFilter: $email}) { nodes { id email } }
}
"""

_GCP_SERVICE_ACCOUNT_QUERY = """
query GcpServiceAccount {
  gcpGetDefaultCredentialsServiceAccount
}
"""


@dataclass(frozen=True)
class AccountServiceClient(AccountService):
    base_url: str
    token: str = ""
    timeout_seconds: float = 30.0
    retries: int = 1

    def request(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        payload = {"query": query, "variables": variables or {}}
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        attempts = max(self.retries, 0) + 1
        last_error: Exception | None = None

        for _ in range(attempts):
            try:
                response = httpx.post(
                    f"{self.base_url.rstrip('/')}/api/graphql",
                    json=payload,
                    headers=headers,
                    timeout=httpx.Timeout(self.timeout_seconds),
                )
                response.raise_for_status()
                body = response.json()
                if not isinstance(body, dict):
                    raise AccountServiceResponseError("GraphQL response body must be a JSON object")
                if body.get("errors"):
                    raise AccountServiceResponseError(f"GraphQL error response: {body['errors']}")
                data = body.get("data")
                if not isinstance(data, dict):
                    raise AccountServiceResponseError("GraphQL response missing 'data' object")
                return data
            except httpx.HTTPStatusError as exc:
                if exc.response.status_code < 500:
                    raise AccountServiceResponseError(
                        f"account service rejected the request with HTTP {exc.response.status_code}"
                    ) from exc
                last_error = exc
            except (httpx.TimeoutException, httpx.ConnectError) as exc:
                last_error = exc
            except ValueError as exc:
                raise AccountServiceResponseError("account service returned invalid JSON") from exc

        raise AccountServiceTransportError(
            f"account service request failed after {attempts} attempt(s)"
        ) from last_error

    def enabled_features(self) -> list[str]:
        data = self.request(_ENABLED_FEATURES_QUERY)
        try:
            features = data["allEnabledFeaturesForAccount"]["features"]
            return [str(item["name"]) for item in features]
        except (KeyError, TypeError) as exc:
            raise AccountServiceResponseError("malformed enabled features response") from exc

    def cloud_account(self, cloud: Cloud, account_id: UUID) -> CloudAccount:
        return self._single_account(cloud, {"id": str(account_id)}, str(account_id))

    def cloud_account_by_native_id(self, cloud: Cloud, native_id: str) -> CloudAccount:
        return self._single_account(cloud, {"nativeId": native_id}, native_id)

    def user_by_email(self, email: str) -> User:
        data = self.request(_USER_QUERY, {"email": email})
        try:
            nodes = data["users"]["nodes"]
            matches = [node for node in nodes if node["email"] == email]
        except (KeyError, TypeError) as exc:
            raise AccountServiceResponseError("malformed user response") from exc
        if len(matches) != 1:
            raise AccountNotFoundError(f"user with email {email!r} not found")
        return User(id=str(matches[0]["id"]), email=email)

    def gcp_service_account(self) -> str:
        data = self.request(_GCP_SERVICE_ACCOUNT_QUERY)
        name = data.get("gcpGetDefaultCredentialsServiceAccount")
        if not isinstance(name, str):
            raise AccountServiceResponseError("malformed GCP service account response")
        return name

    def _single_account(self, cloud: Cloud, account_filter: dict[str, str], label: str) -> CloudAccount:
        data = self.request(_CLOUD_ACCOUNT_QUERY, {"cloud": cloud.upper(), "filter": account_filter})
        accounts = data.get("cloudAccounts")
        if not isinstance(accounts, list):
            raise AccountServiceResponseError("malformed cloud account response")
        if not accounts:
            raise AccountNotFoundError(f"{cloud} account {label!r} not found")
        if len(accounts) > 1:
            raise AccountServiceResponseError(f"{cloud} account {label!r} is ambiguous")
        return _parse_cloud_account(accounts[0])


def _parse_cloud_account(payload: Any) -> CloudAccount:
    try:
        features = {str(item["feature"]): str(item["status"]) for item in payload.get("features") or []}
        return CloudAccount(
            id=UUID(str(payload["id"])),
            native_id=str(payload["nativeId"]),
            name=str(payload.get("name") or ""),
            features=features,
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise AccountServiceResponseError("malformed cloud account payload") from exc


def build_account_service_client(settings: Settings) -> AccountServiceClient:
    return AccountServiceClient(
        base_url=settings.service_url,
        token=settings.service_token,
        timeout_seconds=settings.service_timeout_seconds,
        retries=settings.service_retries,
    )
