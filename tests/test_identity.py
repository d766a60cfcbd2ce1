"""
Unit tests for bearer-token identity verification
"""

import pytest
from datetime import timedelta
import uuid
from jose import jwt

from servicetracker.core.errors import Unauthenticated
from servicetracker.core.identity import JWTIdentityVerifier, create_identity_token
from servicetracker.core.tenancy import extract_bearer_token

SECRET = "test-identity-secret"


@pytest.fixture
def verifier():
    return JWTIdentityVerifier(secret=SECRET, audience="authenticated")


@pytest.mark.asyncio
async def test_verify_valid_token(verifier):
    """A provider-signed token yields the subject, email and display name"""
    user_id = uuid.uuid4()
    token = create_identity_token(
        user_id=user_id,
        email="owner@example.com",
        secret=SECRET,
        full_name="Pat Owner",
    )

    identity = await verifier.verify(token)

    assert identity.id == user_id
    assert identity.email == "owner@example.com"
    assert identity.name == "Pat Owner"


@pytest.mark.asyncio
async def test_verify_token_without_metadata(verifier):
    token = create_identity_token(user_id=uuid.uuid4(), email="a@example.com", secret=SECRET)

    identity = await verifier.verify(token)

    assert identity.name is None


@pytest.mark.asyncio
async def test_verify_expired_token(verifier):
    """Test that expired tokens are rejected"""
    token = create_identity_token(
        user_id=uuid.uuid4(),
        email="a@example.com",
        secret=SECRET,
        expires_delta=timedelta(seconds=-1),
    )

    with pytest.raises(Unauthenticated) as exc_info:
        await verifier.verify(token)
    assert exc_info.value.error == "Invalid token"
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_verify_wrong_secret(verifier):
    token = create_identity_token(user_id=uuid.uuid4(), email="a@example.com", secret="other-secret")

    with pytest.raises(Unauthenticated):
        await verifier.verify(token)


@pytest.mark.asyncio
async def test_verify_wrong_audience(verifier):
    token = create_identity_token(
        user_id=uuid.uuid4(),
        email="a@example.com",
        secret=SECRET,
        audience="anon",
    )

    with pytest.raises(Unauthenticated):
        await verifier.verify(token)


@pytest.mark.asyncio
async def test_verify_non_uuid_subject(verifier):
    token = jwt.encode(
        {"sub": "not-a-uuid", "email": "a@example.com", "aud": "authenticated"},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(Unauthenticated):
        await verifier.verify(token)


@pytest.mark.asyncio
async def test_verify_malformed_token(verifier):
    with pytest.raises(Unauthenticated):
        await verifier.verify("invalid.token.here")


@pytest.mark.asyncio
async def test_verify_empty_token(verifier):
    with pytest.raises(Unauthenticated) as exc_info:
        await verifier.verify("")
    assert exc_info.value.error == "No authorization token provided"


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
    assert extract_bearer_token("bearer abc.def.ghi") == "abc.def.ghi"


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Basic abc", "Token abc", "Bearer a b"])
def test_extract_bearer_token_rejects_malformed_headers(header):
    with pytest.raises(Unauthenticated) as exc_info:
        extract_bearer_token(header)
    assert exc_info.value.error == "No authorization token provided"
