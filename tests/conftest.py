from __future__ import annotations

import os
from uuid import UUID

import pytest

# Tests never reach a live account service; keep runtime mode explicit.
os.environ.setdefault("ACCOUNT_STATE_RUNTIME_ENVIRONMENT", "test")

from account_state.stub import InMemoryAccountService  # noqa: E402
from account_state.types import CloudAccount, User  # noqa: E402

ACCOUNT_ID = UUID("123e4567-e89b-12d3-a456-426614174000")
OTHER_ACCOUNT_ID = UUID("c1bf026b-bb95-4d00-baba-03a188abe9b8")
AZURE_SUBSCRIPTION_ID = "9a1b2c3d-0000-4111-8222-333344445555"


@pytest.fixture
def account_service() -> InMemoryAccountService:
    features = {"CLOUD_NATIVE_PROTECTION": "CONNECTED", "EXOCOMPUTE": "CONNECTED"}
    return InMemoryAccountService(
        accounts={
            "aws": [
                CloudAccount(id=ACCOUNT_ID, native_id="123456789012", name="prod", features=features),
                CloudAccount(id=OTHER_ACCOUNT_ID, native_id="210987654321", name="dev", features=features),
            ],
            "azure": [
                CloudAccount(
                    id=ACCOUNT_ID,
                    native_id=AZURE_SUBSCRIPTION_ID,
                    name="subscription",
                    features={"CLOUD_NATIVE_PROTECTION": "CONNECTED"},
                ),
            ],
            "gcp": [
                CloudAccount(
                    id=ACCOUNT_ID,
                    native_id="my-project",
                    name="project",
                    features={"CLOUD_NATIVE_PROTECTION": "CONNECTED"},
                ),
            ],
        },
        users=[User(id="user-1", email="jane@example.com")],
        features=["RDS_PROTECTION", "EXOCOMPUTE"],
        service_account_name="terraform@my-project.iam.gserviceaccount.com",
    )
