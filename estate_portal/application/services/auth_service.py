"""
Auth service orchestrator.

Account lifecycle over the identity adapter plus session management:
signing in opens the user's session, signing out revokes tokens and tears
the session down (clearing its cache and cancelling its trackers).

Dependencies: estate_portal.boundary.aws.cognito_client, estate_portal.core.session
System role: Authentication use case orchestration
"""

import logging

from estate_portal.boundary.aws.cognito_client import CognitoIdentityClient
from estate_portal.core.session import SessionStore, UserSession
from estate_portal.models.auth import AuthTokens, ResetPasswordRequest, SignUpRequest, SignUpResult

logger = logging.getLogger(__name__)


class AuthService:
    """Sign-up, sign-in and session lifecycle."""

    def __init__(self, identity: CognitoIdentityClient, sessions: SessionStore) -> None:
        self._identity = identity
        self._sessions = sessions

    async def sign_up(self, request: SignUpRequest) -> SignUpResult:
        return await self._identity.sign_up(request)

    async def confirm_sign_up(self, email: str, code: str) -> None:
        await self._identity.confirm_sign_up(email, code)
        logger.info(f"{__name__}:confirm_sign_up - Account confirmed")

    async def resend_confirmation_code(self, email: str) -> None:
        await self._identity.resend_confirmation_code(email)

    async def sign_in(self, email: str, password: str) -> AuthTokens:
        """Sign in and open the user's session."""
        tokens = await self._identity.sign_in(email, password)
        await self.authenticate(tokens.access_token)
        return tokens

    async def authenticate(self, access_token: str) -> UserSession:
        """
        Resolve a bearer token to the user's session.

        Raises:
            AuthenticationError: If the token is not accepted
        """
        user = await self._identity.authenticate(access_token)
        return self._sessions.open(user)

    async def sign_out(self, session: UserSession) -> None:
        user = session.user
        try:
            await self._identity.sign_out(user.access_token)
        finally:
            # Local state goes even if the revoke call fails
            self._sessions.close(user.sub)

    async def forgot_password(self, email: str) -> None:
        await self._identity.forgot_password(email)

    async def reset_password(self, request: ResetPasswordRequest) -> None:
        await self._identity.confirm_forgot_password(request.email, request.code, request.password)
