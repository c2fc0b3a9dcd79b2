from django.db import models
from .main import User, username_validator


class PendingRestaurant(models.Model):
    """
    Restaurant details captured at sign-up and held until the owner's first
    authenticated session creates the real Restaurant row.
    """
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="pending_restaurant")
    username = models.CharField(max_length=64, validators=[username_validator])
    restaurant_name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.restaurant_name} ({self.username})"
