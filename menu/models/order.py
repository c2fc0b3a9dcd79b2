from django.db import models
from accounts.models import Restaurant


# pending -> confirmed -> preparing -> ready -> delivered, or cancelled at any point
class Order(models.Model):
    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("confirmed", "Confirmed"),
        ("preparing", "Preparing"),
        ("ready", "Ready"),
        ("delivered", "Delivered"),
        ("cancelled", "Cancelled"),
    ]

    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE, related_name="orders")
    customer_name = models.CharField(max_length=255)
    customer_phone = models.CharField(max_length=30)
    notes = models.TextField(blank=True, default="")

    # snapshot list of {id, name, price, quantity, total}
    items = models.JSONField(default=list)
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=0)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    is_confirmed = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["restaurant", "-created_at"], name="order_restaurant_created_idx"),
        ]

    def __str__(self):
        return f"Order #{self.pk} - {self.customer_name}"
