"""
Cognito identity adapter.

Wraps the user pool operations the portal needs (sign-up, confirmation,
password sign-in, global sign-out, password reset) and resolves bearer
access tokens into AuthUser identities. boto3 calls are blocking and run
in a worker thread.

Dependencies: boto3
System role: Identity provider boundary
"""

import asyncio
import base64
import binascii
import json
import logging

import boto3
from botocore.exceptions import ClientError

from estate_portal.configs.aws import CognitoSettings
from estate_portal.core.exceptions import AuthenticationError
from estate_portal.core.session import AuthUser, tier_from_groups
from estate_portal.models.auth import AuthTokens, SignUpRequest, SignUpResult

logger = logging.getLogger(__name__)

_ERROR_MESSAGES = {
    "UsernameExistsException": "An account with this email already exists",
    "UserNotConfirmedException": "Please verify your email before signing in",
    "NotAuthorizedException": "Incorrect email or password",
    "UserNotFoundException": "Incorrect email or password",
    "CodeMismatchException": "Invalid verification code",
    "ExpiredCodeException": "Verification code has expired. Please request a new one.",
    "InvalidPasswordException": "Password does not meet the requirements",
    "LimitExceededException": "Too many attempts. Please try again later.",
    "TooManyRequestsException": "Too many attempts. Please try again later.",
}

SESSION_EXPIRED = "Session expired. Please sign in again."


def _auth_error(operation: str, error: ClientError, fallback: str = "Authentication failed") -> AuthenticationError:
    code = error.response.get("Error", {}).get("Code", "Unknown")
    logger.warning(f"{__name__}:{operation} - Cognito error {code}: {error}")
    return AuthenticationError(_ERROR_MESSAGES.get(code, fallback), details={"code": code})


def claims_from_token(token: str) -> dict:
    """
    Decode the payload of a Cognito JWT without verifying it.

    Only use on tokens already verified by the identity provider.

    Raises:
        AuthenticationError: If the token is malformed
    """
    try:
        payload = token.split(".")[1]
        padded = payload + "=" * (-len(payload) % 4)
        return json.loads(base64.urlsafe_b64decode(padded))
    except (IndexError, ValueError, binascii.Error) as e:
        raise AuthenticationError("Invalid token") from e


class CognitoIdentityClient:
    """User pool operations for one app client."""

    def __init__(self, settings: CognitoSettings, client=None) -> None:
        self._settings = settings
        self._client = client or boto3.client("cognito-idp", region_name=settings.region)

    async def _call(self, method: str, **kwargs) -> dict:
        return await asyncio.to_thread(getattr(self._client, method), **kwargs)

    async def sign_up(self, request: SignUpRequest) -> SignUpResult:
        attributes = [
            {"Name": "email", "Value": request.email},
            {"Name": "custom:firstName", "Value": request.first_name},
            {"Name": "custom:lastName", "Value": request.last_name},
            {"Name": "custom:contactNumber", "Value": request.contact_number},
        ]
        try:
            response = await self._call(
                "sign_up",
                ClientId=self._settings.client_id,
                Username=request.email,
                Password=request.password,
                UserAttributes=attributes,
            )
        except ClientError as e:
            raise _auth_error("sign_up", e, "Sign up failed") from e
        logger.info(f"{__name__}:sign_up - Registered {response['UserSub']}")
        return SignUpResult(
            user_sub=response["UserSub"],
            user_confirmed=response.get("UserConfirmed", False),
        )

    async def confirm_sign_up(self, email: str, code: str) -> None:
        try:
            await self._call(
                "confirm_sign_up",
                ClientId=self._settings.client_id,
                Username=email,
                ConfirmationCode=code,
            )
        except ClientError as e:
            raise _auth_error("confirm_sign_up", e, "Verification failed") from e

    async def resend_confirmation_code(self, email: str) -> None:
        try:
            await self._call(
                "resend_confirmation_code",
                ClientId=self._settings.client_id,
                Username=email,
            )
        except ClientError as e:
            raise _auth_error("resend_confirmation_code", e, "Could not resend code") from e

    async def sign_in(self, email: str, password: str) -> AuthTokens:
        """
        Password sign-in (USER_PASSWORD_AUTH).

        Raises:
            AuthenticationError: On bad credentials, unconfirmed users or
                an unexpected challenge
        """
        try:
            response = await self._call(
                "initiate_auth",
                ClientId=self._settings.client_id,
                AuthFlow="USER_PASSWORD_AUTH",
                AuthParameters={"USERNAME": email, "PASSWORD": password},
            )
        except ClientError as e:
            raise _auth_error("sign_in", e) from e

        result = response.get("AuthenticationResult")
        if not result:
            challenge = response.get("ChallengeName", "unknown")
            logger.warning(f"{__name__}:sign_in - Unsupported challenge {challenge}")
            raise AuthenticationError(
                "Additional sign-in steps are required",
                details={"challenge": challenge},
            )
        return AuthTokens(
            access_token=result["AccessToken"],
            id_token=result.get("IdToken"),
            refresh_token=result.get("RefreshToken"),
            expires_in=result.get("ExpiresIn"),
        )

    async def sign_out(self, access_token: str) -> None:
        """Revoke every token issued to the user."""
        try:
            await self._call("global_sign_out", AccessToken=access_token)
        except ClientError as e:
            raise _auth_error("sign_out", e, "Sign out failed") from e

    async def forgot_password(self, email: str) -> None:
        try:
            await self._call(
                "forgot_password",
                ClientId=self._settings.client_id,
                Username=email,
            )
        except ClientError as e:
            raise _auth_error("forgot_password", e, "Could not start password reset") from e

    async def confirm_forgot_password(self, email: str, code: str, password: str) -> None:
        try:
            await self._call(
                "confirm_forgot_password",
                ClientId=self._settings.client_id,
                Username=email,
                ConfirmationCode=code,
                Password=password,
            )
        except ClientError as e:
            raise _auth_error("confirm_forgot_password", e, "Password reset failed") from e

    async def authenticate(self, access_token: str) -> AuthUser:
        """
        Resolve a bearer access token into a user.

        GetUser verifies the token with the user pool; groups come from the
        token's ``cognito:groups`` claim.

        Raises:
            AuthenticationError: If the token is invalid, expired or revoked
        """
        try:
            response = await self._call("get_user", AccessToken=access_token)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.info(f"{__name__}:authenticate - Token rejected ({code})")
            raise AuthenticationError(SESSION_EXPIRED, details={"code": code}) from e

        attributes = {attr["Name"]: attr["Value"] for attr in response.get("UserAttributes", [])}
        claims = claims_from_token(access_token)
        groups = tuple(claims.get("cognito:groups", []))
        return AuthUser(
            sub=attributes.get("sub") or claims.get("sub", ""),
            username=response["Username"],
            access_token=access_token,
            email=attributes.get("email"),
            groups=groups,
            tier=tier_from_groups(
                groups,
                admin_group=self._settings.admin_group,
                paid_group=self._settings.paid_group,
            ),
        )
