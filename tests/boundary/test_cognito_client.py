"""
Tests for the Cognito identity adapter.

Uses botocore's Stubber so no request leaves the process.
"""

import base64
import json

import boto3
import pytest
from botocore.stub import Stubber

from estate_portal.boundary.aws.cognito_client import (
    SESSION_EXPIRED,
    CognitoIdentityClient,
    claims_from_token,
)
from estate_portal.configs.aws import CognitoSettings
from estate_portal.core.exceptions import AuthenticationError
from estate_portal.core.session import Tier
from estate_portal.models.auth import SignUpRequest


def make_token(claims: dict) -> str:
    """Unsigned JWT-shaped token carrying ``claims``."""

    def _segment(data: dict) -> str:
        return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()

    return f"{_segment({'alg': 'RS256'})}.{_segment(claims)}.signature"


@pytest.fixture
def boto_client():
    return boto3.client(
        "cognito-idp",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(boto_client):
    with Stubber(boto_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def identity(boto_client):
    settings = CognitoSettings(user_pool_id="us-east-1_test", client_id="testclient")
    return CognitoIdentityClient(settings, client=boto_client)


def test_claims_from_token():
    token = make_token({"sub": "abc", "cognito:groups": ["paid"]})

    assert claims_from_token(token)["cognito:groups"] == ["paid"]


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.%%%.c"])
def test_claims_from_malformed_token(token):
    with pytest.raises(AuthenticationError):
        claims_from_token(token)


@pytest.mark.asyncio
async def test_authenticate_resolves_user_and_tier(identity, stubber):
    token = make_token({"sub": "sub-1", "cognito:groups": ["paid"]})
    stubber.add_response(
        "get_user",
        {
            "Username": "jane",
            "UserAttributes": [
                {"Name": "sub", "Value": "sub-1"},
                {"Name": "email", "Value": "jane@example.com"},
            ],
        },
        {"AccessToken": token},
    )

    user = await identity.authenticate(token)

    assert user.sub == "sub-1"
    assert user.username == "jane"
    assert user.email == "jane@example.com"
    assert user.groups == ("paid",)
    assert user.tier is Tier.PAID
    assert user.access_token == token


@pytest.mark.asyncio
async def test_authenticate_rejected_token(identity, stubber):
    stubber.add_client_error("get_user", service_error_code="NotAuthorizedException", http_status_code=400)

    with pytest.raises(AuthenticationError) as exc_info:
        await identity.authenticate(make_token({"sub": "x"}))

    assert exc_info.value.message == SESSION_EXPIRED


@pytest.mark.asyncio
async def test_sign_in_returns_tokens(identity, stubber):
    stubber.add_response(
        "initiate_auth",
        {
            "AuthenticationResult": {
                "AccessToken": "access",
                "IdToken": "id",
                "RefreshToken": "refresh",
                "ExpiresIn": 3600,
                "TokenType": "Bearer",
            }
        },
        {
            "ClientId": "testclient",
            "AuthFlow": "USER_PASSWORD_AUTH",
            "AuthParameters": {"USERNAME": "jane@example.com", "PASSWORD": "Secret1!"},
        },
    )

    tokens = await identity.sign_in("jane@example.com", "Secret1!")

    assert tokens.access_token == "access"
    assert tokens.refresh_token == "refresh"
    assert tokens.expires_in == 3600


@pytest.mark.asyncio
async def test_sign_in_bad_password_has_plain_message(identity, stubber):
    stubber.add_client_error("initiate_auth", service_error_code="NotAuthorizedException", http_status_code=400)

    with pytest.raises(AuthenticationError) as exc_info:
        await identity.sign_in("jane@example.com", "wrong")

    assert exc_info.value.message == "Incorrect email or password"


@pytest.mark.asyncio
async def test_sign_in_challenge_is_rejected(identity, stubber):
    stubber.add_response("initiate_auth", {"ChallengeName": "NEW_PASSWORD_REQUIRED"})

    with pytest.raises(AuthenticationError) as exc_info:
        await identity.sign_in("jane@example.com", "Secret1!")

    assert exc_info.value.details["challenge"] == "NEW_PASSWORD_REQUIRED"


@pytest.mark.asyncio
async def test_sign_up_sends_custom_attributes(identity, stubber):
    request = SignUpRequest(
        first_name="Jane",
        last_name="Doe",
        contact_number="5125550100",
        email="jane@example.com",
        password="Secret1!",
        confirm_password="Secret1!",
    )
    stubber.add_response(
        "sign_up",
        {"UserConfirmed": False, "UserSub": "sub-1"},
        {
            "ClientId": "testclient",
            "Username": "jane@example.com",
            "Password": "Secret1!",
            "UserAttributes": [
                {"Name": "email", "Value": "jane@example.com"},
                {"Name": "custom:firstName", "Value": "Jane"},
                {"Name": "custom:lastName", "Value": "Doe"},
                {"Name": "custom:contactNumber", "Value": "5125550100"},
            ],
        },
    )

    result = await identity.sign_up(request)

    assert result.user_sub == "sub-1"
    assert not result.user_confirmed


@pytest.mark.asyncio
async def test_sign_up_existing_user(identity, stubber):
    stubber.add_client_error("sign_up", service_error_code="UsernameExistsException", http_status_code=400)
    request = SignUpRequest(
        first_name="Jane",
        last_name="Doe",
        contact_number="5125550100",
        email="jane@example.com",
        password="Secret1!",
        confirm_password="Secret1!",
    )

    with pytest.raises(AuthenticationError) as exc_info:
        await identity.sign_up(request)

    assert exc_info.value.message == "An account with this email already exists"


@pytest.mark.asyncio
async def test_confirm_with_wrong_code(identity, stubber):
    stubber.add_client_error("confirm_sign_up", service_error_code="CodeMismatchException", http_status_code=400)

    with pytest.raises(AuthenticationError) as exc_info:
        await identity.confirm_sign_up("jane@example.com", "123456")

    assert exc_info.value.message == "Invalid verification code"


@pytest.mark.asyncio
async def test_sign_out_revokes_tokens(identity, stubber):
    stubber.add_response("global_sign_out", {}, {"AccessToken": "access"})

    await identity.sign_out("access")


@pytest.mark.asyncio
async def test_password_reset_flow(identity, stubber):
    stubber.add_response("forgot_password", {})
    stubber.add_response("confirm_forgot_password", {})

    await identity.forgot_password("jane@example.com")
    await identity.confirm_forgot_password("jane@example.com", "123456", "NewSecret1!")
