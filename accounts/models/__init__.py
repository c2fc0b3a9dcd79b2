from .main import (
    User, UserManager, Restaurant, Branch, DeliveryArea,
    USERNAME_PATTERN, DEFAULT_WORKING_HOURS, username_validator,
)
from .pending import PendingRestaurant
