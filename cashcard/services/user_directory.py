"""
Cash Card Service — User Directory
====================================

What:  Abstract credential lookup plus the in-memory implementation built
       from configuration.
Why:   AuthService only needs `lookup(username)`; the directory behind it can
       be swapped (LDAP, a users table, an identity provider) without
       touching the authentication code or the routes.
Who:   Built once per process by `get_user_directory()` (dependencies.py).

Usernames are matched case-insensitively. The returned credentials carry
the username exactly as configured, and that spelling becomes the owner of
any card the user creates.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from pydantic import BaseModel

from cashcard.config import UserEntry
from cashcard.services.password_service import BcryptPasswordService

logger = logging.getLogger(__name__)


class UserCredentials(BaseModel):
    """What the directory knows about one user."""
    username: str
    password_hash: str
    role: str

    model_config = {"frozen": True}


class UserDirectory(ABC):
    """
    Contract:
        - lookup() returns the stored credentials for a username, or None
        - lookup() never verifies passwords; that is AuthService's job
    """

    @abstractmethod
    def lookup(self, username: str) -> Optional[UserCredentials]:
        ...


class InMemoryUserDirectory(UserDirectory):
    """
    Fixed directory held in a dict keyed by lower-cased username.

    Plain-text passwords are hashed once at construction, which costs one
    bcrypt round per user; ready-made bcrypt hashes are stored as given.
    """

    def __init__(self, entries: Iterable[UserEntry], password_service: BcryptPasswordService):
        self._users: Dict[str, UserCredentials] = {}
        for entry in entries:
            password_hash = (
                entry.password
                if password_service.is_hash(entry.password)
                else password_service.hash_password(entry.password)
            )
            self._users[entry.username.lower()] = UserCredentials(
                username=entry.username,
                password_hash=password_hash,
                role=entry.role,
            )
        logger.info("User directory loaded with %d users", len(self._users))

    def lookup(self, username: str) -> Optional[UserCredentials]:
        return self._users.get(username.lower())

    def __len__(self) -> int:
        return len(self._users)
