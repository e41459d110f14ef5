"""
Password handling.

Two strategies share one interface:
- BcryptVerifier: salted bcrypt hash (students)
- PlaintextVerifier: stored as given, compared by equality (teachers)
"""

import hmac

from passlib.context import CryptContext


class PasswordVerifier:
    """Turns a password into its stored form and checks candidates against it."""

    def hash(self, password: str) -> str:
        raise NotImplementedError

    def verify(self, password: str, stored: str) -> bool:
        raise NotImplementedError


class BcryptVerifier(PasswordVerifier):
    def __init__(self, rounds: int = 8):
        self.context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds
        )

    def hash(self, password: str) -> str:
        """Hash password with bcrypt."""
        return self.context.hash(password)

    def verify(self, password: str, stored: str) -> bool:
        """Verify password against hash."""
        return self.context.verify(password, stored)


class PlaintextVerifier(PasswordVerifier):
    # Anyone who can read the collection can read these passwords.
    # Kept for compatibility with existing teacher records.

    def hash(self, password: str) -> str:
        return password

    def verify(self, password: str, stored: str) -> bool:
        if stored is None:
            return False
        return hmac.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))
