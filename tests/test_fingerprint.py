import hashlib
from itertools import permutations

import pytest

from account_state.fingerprint import feature_fingerprint, sha256_text


def test_fingerprint_is_stable_across_orderings() -> None:
    first = feature_fingerprint(["EXOCOMPUTE", "RDS_PROTECTION"])
    second = feature_fingerprint(["RDS_PROTECTION", "EXOCOMPUTE"])

    assert first == second
    assert feature_fingerprint(["EXOCOMPUTE"]) != first


def test_fingerprint_is_stable_for_every_permutation() -> None:
    names = ["CLOUD_NATIVE_PROTECTION", "EXOCOMPUTE", "RDS_PROTECTION", "SERVERS_AND_APPS"]
    expected = feature_fingerprint(names)

    for ordering in permutations(names):
        assert feature_fingerprint(ordering) == expected
    assert feature_fingerprint(set(names)) == expected


def test_fingerprint_ignores_duplicates() -> None:
    assert feature_fingerprint(["EXOCOMPUTE", "EXOCOMPUTE"]) == feature_fingerprint(["EXOCOMPUTE"])


def test_fingerprint_distinguishes_concatenation_lookalikes() -> None:
    assert feature_fingerprint(["AB", "C"]) != feature_fingerprint(["A", "BC"])


def test_fingerprint_format() -> None:
    digest = feature_fingerprint(["EXOCOMPUTE"])

    assert len(digest) == 64
    assert digest == digest.lower()
    int(digest, 16)
    assert digest == hashlib.sha256(b"EXOCOMPUTE\x00").hexdigest()


def test_fingerprint_of_empty_set() -> None:
    assert feature_fingerprint([]) == hashlib.sha256(b"").hexdigest()


def test_fingerprint_rejects_nul_in_names() -> None:
    with pytest.raises(ValueError, match="NUL"):
        feature_fingerprint(["EXO\x00COMPUTE"])


def test_sha256_text() -> None:
    assert sha256_text("abc") == hashlib.sha256(b"abc").hexdigest()
