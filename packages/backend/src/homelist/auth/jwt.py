"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
The token carries exactly three claims:
- sub: the user id
- iat: issued-at (whole seconds)
- exp: iat + 7 days

There is no refresh token and no revocation list: a token stays valid
until it expires, whatever happens to the account in the meantime.

iat is the issuing clock truncated to whole seconds, and exp is counted
from that iat. A token can therefore expire up to one second short of
seven days after the moment it was actually issued.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union

import jwt

TOKEN_TTL = timedelta(days=7)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies HS256 bearer tokens with one process-wide key.

    Learn: verify() collapses every failure (bad signature, garbage input,
    missing claim, expired) into None. Callers can't tell the cases apart,
    which is the point: there's nothing for an attacker to probe.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: Union[str, uuid.UUID]) -> str:
        """Create a signed token for a user."""
        issued_at = int(self._clock().timestamp())
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + int(TOKEN_TTL.total_seconds()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[str]:
        """Return the token's subject, or None if the token is not valid now."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                # Signature only; expiry is checked below against the clock
                options={
                    "require": ["sub", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "verify_aud": False,
                    "verify_iss": False,
                },
            )
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (jwt.InvalidTokenError, TypeError, ValueError, OverflowError):
            return None

        if self._clock() >= expires_at:
            return None

        subject = payload["sub"]
        if not isinstance(subject, str) or not subject:
            return None
        return subject
