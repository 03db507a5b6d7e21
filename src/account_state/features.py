"""Enabled-features lookup with a fingerprint id."""

from __future__ import annotations

from account_state.fingerprint import feature_fingerprint
from account_state.service import AccountService
from account_state.types import FeaturesSnapshot


def read_enabled_features(service: AccountService) -> FeaturesSnapshot:
    """Return the enabled features, sorted, identified by their fingerprint.

    The id is recomputed on every read and only changes when the set of
    enabled features changes.
    """
    features = sorted(set(service.enabled_features()))
    return FeaturesSnapshot(id=feature_fingerprint(features), features=features)
