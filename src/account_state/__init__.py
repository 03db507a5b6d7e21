"""Resource identity and state schema migration for cloud account resources."""

from account_state.executor import MigrationExecutor, migrate_resource_state
from account_state.features import read_enabled_features
from account_state.fingerprint import feature_fingerprint
from account_state.identifiers import CompositeId, decode_composite_id, encode_composite_id
from account_state.ladder import SchemaLadder, UpgradeContext, UpgradeStep
from account_state.resources import build_ladders

__all__ = [
    "CompositeId",
    "MigrationExecutor",
    "SchemaLadder",
    "UpgradeContext",
    "UpgradeStep",
    "build_ladders",
    "decode_composite_id",
    "encode_composite_id",
    "feature_fingerprint",
    "migrate_resource_state",
    "read_enabled_features",
]
