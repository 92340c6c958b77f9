"""
Cash Card Service — Bcrypt Password Service
=============================================

What:  Hashes and verifies passwords with bcrypt.
Who:   InMemoryUserDirectory hashes configured passwords; AuthService
       verifies the password presented with each request.

Cost:
    bcrypt is deliberately slow so that stolen hashes are expensive to
    brute-force. Cost factor 12 is roughly 250ms per hash or verification,
    and each +1 doubles it. Tests run with the minimum (4).

Note:
    All methods are synchronous because bcrypt is CPU-bound. Async callers
    run verify_password() in the threadpool (see AuthService).
"""

import bcrypt

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


class BcryptPasswordService:
    """
    Bcrypt password hashing and verification.

    Usage:
        service = BcryptPasswordService(cost_factor=12)
        password_hash = service.hash_password("abc123")
        service.verify_password("abc123", password_hash)   # True
    """

    def __init__(self, cost_factor: int = 12) -> None:
        if cost_factor < 4 or cost_factor > 20:
            raise ValueError("bcrypt cost factor must be between 4 and 20")
        self._cost_factor = cost_factor

    @property
    def cost_factor(self) -> int:
        return self._cost_factor

    def hash_password(self, password: str) -> str:
        """
        Hash a plaintext password with a fresh random salt.

        Returns:
            60-character bcrypt string ($2b$<cost>$<salt><hash>). Hashing the
            same password twice gives different strings.
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """
        Verify a plaintext password against a bcrypt hash.

        Returns False (never raises) for a malformed hash.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False

    @staticmethod
    def is_hash(value: str) -> bool:
        """True when `value` already looks like a bcrypt hash."""
        return value.startswith(BCRYPT_PREFIXES) and len(value) == 60
