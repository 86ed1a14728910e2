"""Ownership guard — the single authorization decision point.

Learn: authorize() answers "may this actor do this to this listing?"
and nothing else. Reads of active listings are public (the service has
already filtered out inactive ones before asking). Updates and deletes
need an actor, and the actor must be the listing's author.

The guard reveals existence on purpose: a non-owner gets "forbidden"
(403), not "not found". enforce() turns a deny into the matching error.
"""

import enum
import uuid
from dataclasses import dataclass
from typing import Any, Optional

from homelist.errors import AuthenticationError, AuthorizationError


class Action(str, enum.Enum):
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class DenyReason(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenyReason] = None


ALLOW = Decision(allowed=True)


def authorize(
    action: Action, resource: Any, actor_id: Optional[uuid.UUID]
) -> Decision:
    """Decide whether actor_id may perform action on resource.

    resource is anything with an author_id attribute.
    """
    if action is Action.READ:
        return ALLOW
    if actor_id is None:
        return Decision(allowed=False, reason=DenyReason.UNAUTHENTICATED)
    if actor_id != resource.author_id:
        return Decision(allowed=False, reason=DenyReason.FORBIDDEN)
    return ALLOW


def enforce(action: Action, resource: Any, actor_id: Optional[uuid.UUID]) -> None:
    """Raise unless authorize() allows the action."""
    decision = authorize(action, resource, actor_id)
    if decision.allowed:
        return
    if decision.reason is DenyReason.UNAUTHENTICATED:
        raise AuthenticationError()
    raise AuthorizationError(f"Unauthorized to {action.value} this listing")
