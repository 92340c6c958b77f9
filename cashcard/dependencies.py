"""
Cash Card Service — FastAPI Dependencies
==========================================

What:  Reusable dependencies for authentication and authorization.
Who:   Injected into every /cashcards route handler.

Dependency chain:
    basic_auth ─┐
                ├─▶ get_current_principal ─▶ require_card_owner ─▶ card_payload ─▶ handler
    get_auth_service ◀─ get_user_directory

The request body is parsed by `card_payload`, which itself depends on
`require_card_owner`: credentials and role are checked before the body is
read, so a malformed body from an unauthenticated caller is still a 401.

`get_user_directory` and `get_auth_service` are cached per process: the
directory hashes its passwords once. Tests replace them through
`app.dependency_overrides`.
"""

import base64
import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param
from pydantic import ValidationError as PydanticValidationError

from cashcard.config import settings
from cashcard.exceptions import AuthenticationError, ValidationError
from cashcard.schemas.cashcard import CashCardRequest
from cashcard.services.auth_service import AuthService, Principal
from cashcard.services.password_service import BcryptPasswordService
from cashcard.services.user_directory import InMemoryUserDirectory, UserDirectory

logger = logging.getLogger(__name__)


class UTF8HTTPBasic(HTTPBasic):
    """
    HTTP Basic extraction that decodes `user:password` as UTF-8.

    FastAPI's HTTPBasic decodes ASCII only, which locks out users with
    non-ASCII passwords. A missing header yields None; a header that is not
    valid base64 UTF-8 with a colon raises AuthenticationError. Both end as
    an empty 401 like every other credential failure.
    """

    async def __call__(self, request: Request) -> Optional[HTTPBasicCredentials]:
        authorization = request.headers.get("Authorization")
        scheme, param = get_authorization_scheme_param(authorization)
        if not authorization or scheme.lower() != "basic" or not param:
            return None

        try:
            decoded = base64.b64decode(param, validate=True).decode("utf-8")
        except ValueError:
            # binascii.Error and UnicodeDecodeError are both ValueErrors
            raise AuthenticationError(message="Malformed Basic credentials")

        username, separator, password = decoded.partition(":")
        if not separator:
            raise AuthenticationError(message="Malformed Basic credentials")
        return HTTPBasicCredentials(username=username, password=password)


basic_auth = UTF8HTTPBasic(realm=settings.auth_realm, auto_error=False)


@lru_cache
def get_password_service() -> BcryptPasswordService:
    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache
def get_user_directory() -> UserDirectory:
    """Build the configured in-memory user directory (once per process)."""
    return InMemoryUserDirectory(settings.users, get_password_service())


def get_auth_service(directory: UserDirectory = Depends(get_user_directory)) -> AuthService:
    return _auth_service_for(directory)


@lru_cache
def _auth_service_for(directory: UserDirectory) -> AuthService:
    return AuthService(directory, get_password_service())


async def get_current_principal(
    request: Request,
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
    auth_service: AuthService = Depends(get_auth_service),
) -> Principal:
    """
    Authenticate the request from its Authorization header.

    The username is also stored on request.state so the access log can
    record who made the call.

    Raises:
        AuthenticationError: header missing, unknown user, or wrong password (→ 401)
    """
    if credentials is None:
        raise AuthenticationError(message="Missing credentials")

    principal = await auth_service.authenticate(credentials.username, credentials.password)
    request.state.username = principal.username
    return principal


async def require_card_owner(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """
    Raises:
        AuthorizationError: authenticated, but without settings.required_role (→ 403)
    """
    return AuthService.authorize(principal, settings.required_role)


async def card_payload(
    request: Request,
    principal: Principal = Depends(require_card_owner),
) -> CashCardRequest:
    """
    Parse the JSON body of POST/PUT /cashcards once the caller is authorized.

    Raises:
        ValidationError: body is not JSON, or amount is missing or out of range (→ 400)
    """
    body = await request.body()
    try:
        return CashCardRequest.model_validate_json(body)
    except PydanticValidationError as e:
        raise ValidationError(
            message=f"Invalid cash card body from {principal.username}: {e.error_count()} error(s)",
            field="amount",
        )
