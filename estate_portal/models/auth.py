"""
Authentication request schemas.

Field rules mirror the user pool's password policy and attribute formats
so invalid input is rejected before reaching Cognito.

Dependencies: pydantic
System role: Auth API contracts
"""

import re
from typing import Annotated

from pydantic import AfterValidator, Field, model_validator

from estate_portal.models.common import ApiModel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_NAME_PATTERN = r"^[a-zA-Z\s'-]+$"


def _check_email(value: str) -> str:
    if not _EMAIL_RE.match(value):
        raise ValueError("Please enter a valid email address")
    return value


def check_password_strength(value: str) -> str:
    """Raise ValueError unless the password meets the pool policy."""
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters")
    if not re.search(r"[a-z]", value):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"[A-Z]", value):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[0-9]", value):
        raise ValueError("Password must contain at least one number")
    if not re.search(r"[^A-Za-z0-9]", value):
        raise ValueError("Password must contain at least one special character")
    return value


Email = Annotated[str, AfterValidator(_check_email)]
Password = Annotated[str, AfterValidator(check_password_strength)]
VerificationCode = Annotated[str, Field(min_length=6, max_length=6, pattern=r"^[0-9]+$")]


class SignUpRequest(ApiModel):
    first_name: str = Field(min_length=1, max_length=50, pattern=_NAME_PATTERN)
    last_name: str = Field(min_length=1, max_length=50, pattern=_NAME_PATTERN)
    contact_number: str = Field(min_length=10, max_length=20, pattern=r"^[+]?[0-9\s()-]+$")
    email: Email
    password: Password
    confirm_password: str

    @model_validator(mode="after")
    def _passwords_match(self) -> "SignUpRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class ConfirmSignUpRequest(ApiModel):
    email: Email
    code: VerificationCode


class EmailRequest(ApiModel):
    email: Email


class SignInRequest(ApiModel):
    email: Email
    password: str = Field(min_length=1)


class ResetPasswordRequest(ApiModel):
    email: Email
    code: VerificationCode
    password: Password
    confirm_password: str

    @model_validator(mode="after")
    def _passwords_match(self) -> "ResetPasswordRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class AuthTokens(ApiModel):
    access_token: str
    id_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "Bearer"


class SignUpResult(ApiModel):
    user_sub: str
    user_confirmed: bool = False
