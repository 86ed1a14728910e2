"""Request authentication — bearer token → identity.

Learn: identify() is the whole authenticator: a pure function from the
Authorization header to a user id or None. It never raises, whatever the
header holds. The FastAPI dependencies below wrap it:
1. get_current_user_optional → CurrentIdentity or None (public routes)
2. get_current_user → CurrentIdentity or 401 (protected routes)
"""

import uuid
from typing import Optional

from fastapi import Depends, Header, Request

from homelist.auth.jwt import TokenService
from homelist.errors import AuthenticationError

BEARER_PREFIX = "Bearer "


class CurrentIdentity:
    """The authenticated user making the request.

    Learn: Built only from a verified token. Route handlers pass
    user_id down to services, which hand it to the ownership guard.
    """

    def __init__(self, user_id: uuid.UUID):
        self.user_id = user_id

    def __repr__(self) -> str:
        return f"CurrentIdentity(user_id={self.user_id!s})"


def identify(authorization: Optional[str], tokens: TokenService) -> Optional[str]:
    """Extract and verify a bearer token. Returns the user id or None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        return None
    return tokens.verify(token)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


async def get_current_user_optional(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[CurrentIdentity]:
    """Extract current identity (optional: returns None if no valid auth).

    Learn: This is the "soft" auth dependency. A bad token here is the
    same as no token at all.
    """
    subject = identify(authorization, tokens)
    if subject is None:
        return None
    try:
        return CurrentIdentity(user_id=uuid.UUID(subject))
    except ValueError:
        return None


async def get_current_user(
    identity: Optional[CurrentIdentity] = Depends(get_current_user_optional),
) -> CurrentIdentity:
    """Extract current identity (required: 401 if no auth).

    Learn: This is the "hard" auth dependency. Used for endpoints
    that require authentication.
    """
    if identity is None:
        raise AuthenticationError()
    return identity
