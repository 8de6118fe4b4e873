"""Password hashing with bcrypt."""

import bcrypt


def hash_password(plain: str) -> str:
    """Return a bcrypt hash of the given plaintext password.

    bcrypt rejects secrets over 72 bytes; request schemas enforce that
    limit before a password reaches this function.
    """
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


# Verified against when the email is unknown so both login failures cost
# one bcrypt check.
DUMMY_HASH: str = hash_password("devconnect-timing-dummy")
