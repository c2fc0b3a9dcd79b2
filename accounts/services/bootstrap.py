import logging
from dataclasses import dataclass

from django.db import IntegrityError, transaction

from accounts.models import Restaurant, PendingRestaurant

logger = logging.getLogger(__name__)

NO_PENDING_DATA = "No pending restaurant data found"


@dataclass(frozen=True)
class BootstrapResult:
    created: bool
    username: str | None = None
    error: str | None = None


def default_description(name: str) -> str:
    return f"{name} restaurant - serving the finest dishes"


def _existing_username(user):
    return (
        Restaurant.objects.filter(owner=user)
        .values_list("username", flat=True)
        .first()
    )


def ensure_restaurant_exists(user) -> BootstrapResult:
    """
    Idempotent: create the owner's restaurant from the data staged at sign-up.
    A uniqueness violation on insert means another request won the race, which
    is reported as success with the staged data discarded.
    """
    username = _existing_username(user)
    if username:
        return BootstrapResult(created=False, username=username)

    pending = PendingRestaurant.objects.filter(user=user).first()
    if pending is None:
        return BootstrapResult(created=False, error=NO_PENDING_DATA)

    try:
        with transaction.atomic():
            restaurant = Restaurant.objects.create(
                owner=user,
                name=pending.restaurant_name,
                username=pending.username,
                description=default_description(pending.restaurant_name),
            )
    except IntegrityError:
        logger.info("restaurant for user %s already created, discarding staged data", user.pk)
        pending.delete()
        return BootstrapResult(
            created=False,
            username=Restaurant.objects.filter(owner=user).values_list("username", flat=True).first(),
        )

    pending.delete()
    logger.info("restaurant %s created for user %s", restaurant.username, user.pk)
    return BootstrapResult(created=True, username=restaurant.username)
