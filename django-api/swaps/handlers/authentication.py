"""Actor identification for HTTP handlers.

Authentication happens upstream (gateway or session layer). By the time a
request reaches these handlers the caller's user id is carried in the
``X-Actor-Id`` header and is trusted as-is.
"""

from dataclasses import dataclass

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication
from rest_framework.request import Request

from swaps.domain import UserId

ACTOR_HEADER = "X-Actor-Id"


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, exposed as ``request.user``."""

    user_id: UserId

    @property
    def is_authenticated(self) -> bool:
        return True


class ActorHeaderAuthentication(BaseAuthentication):
    def authenticate(self, request: Request) -> tuple[Actor, None] | None:
        raw = request.headers.get(ACTOR_HEADER)
        if not raw:
            return None
        try:
            user_id = UserId.from_string(raw)
        except ValueError:
            raise exceptions.AuthenticationFailed("Invalid actor id")
        return Actor(user_id=user_id), None

    def authenticate_header(self, request: Request) -> str:
        return ACTOR_HEADER
