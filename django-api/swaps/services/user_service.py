"""User service - sign-up and credential checks.

Session handling lives outside this project; callers exchange
credentials for a user record and pass its id as the actor from then on.
"""

import logging

from django.contrib.auth.hashers import check_password, make_password

from swaps.domain import EmailAddress, User, UserId
from swaps.domain.errors import NotFoundError, ValidationError
from swaps.services.common import parse_id
from swaps.stores.interfaces import SwapStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class UserService:
    """Service for registering and authenticating users."""

    def __init__(self, store: SwapStore) -> None:
        self._store = store

    def register_user(self, name: str, email: str, password: str) -> User:
        """Create a user with a hashed password.

        Raises:
            ValidationError: If a field is blank, the email is malformed,
                or the email is already registered.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required")
        try:
            address = EmailAddress.from_string(email or "")
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        if not password:
            raise ValidationError("Password is required")

        user = User(
            id=UserId.new(),
            name=name,
            email=address,
            password_hash=make_password(password),
        )
        with self._store.atomic():
            if not self._store.add_user(user):
                raise ValidationError("Email is already registered")

        logger.info("User %s registered", user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Return the user matching the credentials.

        Unknown emails and wrong passwords are indistinguishable to callers.
        """
        try:
            address = EmailAddress.from_string(email or "")
        except ValueError as exc:
            raise ValidationError(INVALID_CREDENTIALS) from exc

        user = self._store.get_user_by_email(address)
        if user is None or not check_password(password, user.password_hash):
            logger.debug("Failed login attempt for %s", address)
            raise ValidationError(INVALID_CREDENTIALS)
        return user

    def get_user(self, user_id: str | UserId) -> User:
        uid = parse_id(UserId, user_id, "user id")
        user = self._store.get_user(uid)
        if user is None:
            raise NotFoundError("User", uid)
        return user
