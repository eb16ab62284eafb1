"""
Snapshot parsing for cached identities.

A cached snapshot is trusted on read, so anything that is not a complete
identity with a known role must be rejected.
"""
from __future__ import annotations

import pytest

from backend.identity_access.domain import AuthResult, Identity, INVALID_CREDENTIALS


def test_snapshot_roundtrip_excludes_secret():
    ident = Identity(id="abc", name="Ada", email="ada@example.com", role="explorer")
    snap = ident.to_snapshot()
    assert set(snap) == {"id", "name", "email", "role"}
    assert Identity.from_snapshot(snap) == ident


@pytest.mark.parametrize(
    "data",
    [
        None,
        [],
        "ada",
        {"id": "abc", "name": "Ada", "email": "ada@example.com"},
        {"id": "abc", "name": "", "email": "ada@example.com", "role": "explorer"},
        {"id": 1, "name": "Ada", "email": "ada@example.com", "role": "explorer"},
        {"id": "abc", "name": "Ada", "email": "ada@example.com", "role": "admin"},
    ],
)
def test_from_snapshot_rejects_malformed(data):
    with pytest.raises(ValueError):
        Identity.from_snapshot(data)


def test_auth_result_ok_flag():
    ident = Identity(id="abc", name="Ada", email="ada@example.com", role="contributor")
    assert AuthResult.success(ident).ok
    failed = AuthResult.failure(INVALID_CREDENTIALS)
    assert not failed.ok
    assert failed.identity is None
