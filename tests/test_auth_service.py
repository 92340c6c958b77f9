"""
Cash Card Service — Authentication Unit Tests
===============================================

What:  bcrypt hashing, the in-memory user directory, and AuthService.
How:   Real bcrypt at cost factor 4 (fast); no HTTP, no database.
"""

import pytest

from cashcard.config import UserEntry
from cashcard.exceptions import AuthenticationError, AuthorizationError
from cashcard.services.auth_service import AuthService, Principal
from cashcard.services.password_service import BcryptPasswordService
from cashcard.services.user_directory import InMemoryUserDirectory


class TestBcryptPasswordService:

    def test_hash_and_verify(self, password_service):
        password_hash = password_service.hash_password("abc123")

        assert password_service.verify_password("abc123", password_hash)
        assert not password_service.verify_password("abc124", password_hash)

    def test_hashes_are_salted(self, password_service):
        assert password_service.hash_password("abc123") != password_service.hash_password("abc123")

    def test_malformed_hash_does_not_verify(self, password_service):
        assert password_service.verify_password("abc123", "not-a-hash") is False

    def test_is_hash(self, password_service):
        assert BcryptPasswordService.is_hash(password_service.hash_password("abc123"))
        assert not BcryptPasswordService.is_hash("abc123")

    def test_cost_factor_bounds(self):
        with pytest.raises(ValueError):
            BcryptPasswordService(cost_factor=3)
        with pytest.raises(ValueError):
            BcryptPasswordService(cost_factor=21)


class TestInMemoryUserDirectory:

    def test_lookup_is_case_insensitive(self, user_directory):
        credentials = user_directory.lookup("bOB")

        assert credentials is not None
        assert credentials.username == "Bob"
        assert credentials.role == "CARD-OWNER"

    def test_unknown_user(self, user_directory):
        assert user_directory.lookup("Mallory") is None

    def test_plain_passwords_are_hashed(self, user_directory, password_service):
        credentials = user_directory.lookup("Joe")

        assert credentials.password_hash != "123abc"
        assert password_service.verify_password("123abc", credentials.password_hash)

    def test_prehashed_passwords_are_kept(self, password_service):
        password_hash = password_service.hash_password("s3cret")
        directory = InMemoryUserDirectory(
            [UserEntry(username="Ann", password=password_hash, role="CARD-OWNER")],
            password_service,
        )

        assert directory.lookup("ann").password_hash == password_hash
        assert len(directory) == 1


class TestAuthService:

    def setup_method(self):
        self.password_service = BcryptPasswordService(cost_factor=4)
        self.directory = InMemoryUserDirectory(
            [
                UserEntry(username="Bob", password="abc123", role="CARD-OWNER"),
                UserEntry(username="John", password="xyz321", role="NON-OWNER"),
            ],
            self.password_service,
        )
        self.service = AuthService(self.directory, self.password_service)

    @pytest.mark.asyncio
    async def test_valid_credentials(self):
        principal = await self.service.authenticate("bob", "abc123")

        assert principal == Principal(username="Bob", role="CARD-OWNER")

    @pytest.mark.asyncio
    async def test_wrong_password(self):
        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.authenticate("Bob", "xyz321")

        assert exc_info.value.context["reason"] == "bad_password"

    @pytest.mark.asyncio
    async def test_unknown_user(self):
        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.authenticate("BAD-USER", "abc123")

        assert exc_info.value.context["reason"] == "unknown_user"

    def test_authorize_with_required_role(self):
        principal = Principal(username="Bob", role="CARD-OWNER")

        assert AuthService.authorize(principal, "CARD-OWNER") is principal

    def test_authorize_without_required_role(self):
        with pytest.raises(AuthorizationError) as exc_info:
            AuthService.authorize(Principal(username="John", role="NON-OWNER"), "CARD-OWNER")

        assert exc_info.value.required_role == "CARD-OWNER"
