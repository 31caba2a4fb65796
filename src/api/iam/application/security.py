"""Password hashing and verification.

Uses bcrypt with a per-hash random salt; verification is constant-time.
"""

import bcrypt

MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt.

    Args:
        password: The plaintext password

    Returns:
        The bcrypt hash as a string
    """
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash.

    Returns False for malformed hashes instead of raising, so a corrupt
    row behaves like a wrong password.
    """
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        return False
