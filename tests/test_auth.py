from datetime import timedelta

import pytest
from fastapi import HTTPException

from salon_admin.core.auth import create_access_token, decode_token, revoke_token, revoked_tokens


@pytest.fixture(autouse=True)
def clean_revocations():
    revoked_tokens.clear()
    yield
    revoked_tokens.clear()


def test_revoked_token_is_refused():
    token = create_access_token({"sub": "staff@example.com", "role": "staff"})
    assert decode_token(token)["sub"] == "staff@example.com"

    revoke_token(token)
    with pytest.raises(HTTPException) as exc_info:
        decode_token(token)
    assert exc_info.value.status_code == 401


def test_expired_revocations_are_pruned():
    stale = create_access_token({"sub": "a@example.com"}, expires_delta=timedelta(seconds=1))
    revoke_token(stale)
    stale_jti = next(iter(revoked_tokens))
    # Pretend it expired a while ago
    revoked_tokens[stale_jti] = 0

    fresh = create_access_token({"sub": "b@example.com"})
    revoke_token(fresh)
    assert stale_jti not in revoked_tokens
    assert len(revoked_tokens) == 1


def test_revoking_garbage_is_a_no_op():
    revoke_token("not-a-jwt")
    assert revoked_tokens == {}
