"""
Smart Tourism Backend — Password Hashing
==========================================

What:  Salted password hashing and verification.
How:   argon2-cffi's PasswordHasher; each hash embeds its own random salt and
       parameters, and verification runs in constant time.
Who:   UserService at registration (hash) and login (verify).
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

ph = PasswordHasher()


def get_password_hash(password: str) -> str:
    return ph.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """True when `plain_password` matches; False on mismatch or a malformed hash."""
    if not hashed_password:
        return False
    try:
        return ph.verify(hashed_password, plain_password)
    except (VerificationError, InvalidHashError):
        return False
