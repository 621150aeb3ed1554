"""User authentication service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Locks the user row while last_login is updated.

    Args:
        email: User's email
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email)
        )
    except User.DoesNotExist:
        logger.warning("Login failed for unknown email %s", email)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        logger.warning("Login failed for %s: wrong password", email)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    logger.info("User %s logged in", user.email)
    return user
