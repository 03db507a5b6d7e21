"""Resource state CLI."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from account_state.cli import (
    decode_id,
    encode_id,
    features_snapshot,
    fingerprint_names,
    list_ladders,
    load_state,
    upgrade_state,
)
from account_state.client import build_account_service_client
from account_state.config import get_settings, validate_settings
from account_state.errors import AccountServiceError, StateMigrationError
from account_state.resources import build_ladders


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resource state identity and upgrade CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("ladders", help="List resource types and their schema versions")

    encode_parser = sub.add_parser("encode-id", help="Encode a composite resource id")
    encode_parser.add_argument("--key", required=True)
    encode_parser.add_argument("--account-id", required=True)

    decode_parser = sub.add_parser("decode-id", help="Decode a composite resource id")
    decode_parser.add_argument("id")

    fingerprint_parser = sub.add_parser("fingerprint", help="Fingerprint a set of feature names")
    fingerprint_parser.add_argument("names", nargs="+")

    sub.add_parser("features", help="Read enabled features from the account service")

    upgrade_parser = sub.add_parser("upgrade", help="Upgrade stored resource state")
    upgrade_parser.add_argument("--resource", required=True, help="Resource type, e.g. polaris_gcp_project")
    upgrade_parser.add_argument("--stored-version", required=True, type=int)
    state_group = upgrade_parser.add_mutually_exclusive_group(required=True)
    state_group.add_argument("--state-json")
    state_group.add_argument("--state-file", type=Path)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    try:
        if args.command == "ladders":
            print(json.dumps(list_ladders(build_ladders()), indent=2))
            return 0
        if args.command == "encode-id":
            print(encode_id(args.key, args.account_id))
            return 0
        if args.command == "decode-id":
            print(json.dumps(decode_id(args.id), indent=2))
            return 0
        if args.command == "fingerprint":
            print(json.dumps(fingerprint_names(args.names), indent=2))
            return 0

        validate_settings(settings)
        service = build_account_service_client(settings)
        if args.command == "features":
            print(json.dumps(features_snapshot(service), indent=2))
            return 0
        if args.command == "upgrade":
            state = load_state(state_json=args.state_json, state_file=args.state_file)
            result = upgrade_state(
                build_ladders(),
                resource_type=args.resource,
                stored_version=args.stored_version,
                state=state,
                service=service,
            )
            print(json.dumps(result, indent=2, sort_keys=True))
            return 0
        parser.error(f"Unknown command: {args.command}")
    except (StateMigrationError, AccountServiceError, OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
