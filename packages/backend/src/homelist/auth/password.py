"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks.
The work factor (rounds=12) takes ~250ms per hash on modern hardware,
so services call these methods through asyncio.to_thread rather than
blocking the event loop.
"""

import secrets
import bcrypt

DEFAULT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes; newer releases raise instead of
# truncating, so truncate explicitly and identically on hash and verify.
_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_PASSWORD_BYTES]


class PasswordHasher:
    """bcrypt hash/verify with a fixed work factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        # Hashed once here; an unknown-email login only ever verifies against it
        self.dummy_hash = self.hash(secrets.token_urlsafe(16))

    def hash(self, password: str) -> str:
        """Hash a password with bcrypt.

        Learn: bcrypt includes a random salt automatically and produces
        hashes starting with "$2b$", so hashing the same password twice
        gives two different strings that both verify.
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash.

        bcrypt.checkpw compares in constant time. A malformed or missing
        hash is a failed match, never an exception.
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False

