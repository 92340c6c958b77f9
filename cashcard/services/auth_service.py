"""
Cash Card Service — Authentication & Authorization Service
============================================================

What:  Resolves HTTP Basic credentials to a Principal and enforces roles.
How:   Looks the username up in the UserDirectory and checks the password
       with bcrypt in a worker thread, so the event loop keeps serving other
       requests while a hash is being computed.
Who:   Called by the `get_current_principal` / `require_card_owner`
       dependencies (dependencies.py) on every /cashcards request.

Flow per request:
    credentials ──▶ lookup(username) ──▶ bcrypt verify ──▶ Principal
                         │ None               │ mismatch
                         ▼                    ▼
                  dummy verify ──────▶ AuthenticationError (401)

    Principal ──▶ role == required_role ? ──▶ handler
                         │ no
                         ▼
                  AuthorizationError (403)

Nothing is remembered between requests: every request is authenticated
from scratch.
"""

import logging

from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from cashcard.exceptions import AuthenticationError, AuthorizationError
from cashcard.services.password_service import BcryptPasswordService
from cashcard.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)


class Principal(BaseModel):
    """The authenticated caller. `username` is the owner of their cards."""
    username: str
    role: str

    model_config = {"frozen": True}


class AuthService:
    """
    Verifies credentials against a UserDirectory.

    For unknown usernames a password is still checked against a throwaway
    hash, so both failure paths take about the same time and response
    timing does not reveal which usernames exist.
    """

    def __init__(self, directory: UserDirectory, password_service: BcryptPasswordService):
        self.directory = directory
        self.password_service = password_service
        self._dummy_hash = password_service.hash_password("cashcard-timing-guard")

    def _verify(self, username: str, password: str) -> Principal:
        credentials = self.directory.lookup(username)
        if credentials is None:
            self.password_service.verify_password(password, self._dummy_hash)
            raise AuthenticationError(
                message="Invalid username or password",
                context={"reason": "unknown_user"},
            )

        if not self.password_service.verify_password(password, credentials.password_hash):
            raise AuthenticationError(
                message="Invalid username or password",
                context={"reason": "bad_password", "username": credentials.username},
            )

        return Principal(username=credentials.username, role=credentials.role)

    async def authenticate(self, username: str, password: str) -> Principal:
        """
        Resolve a username/password pair to a Principal.

        Raises:
            AuthenticationError: unknown user or wrong password
        """
        return await run_in_threadpool(self._verify, username, password)

    @staticmethod
    def authorize(principal: Principal, required_role: str) -> Principal:
        """
        Raises:
            AuthorizationError: the principal does not hold `required_role`
        """
        if principal.role != required_role:
            raise AuthorizationError(username=principal.username, required_role=required_role)
        return principal
