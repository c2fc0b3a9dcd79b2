from django.db import models
from accounts.models import Restaurant


class Category(models.Model):
    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE, related_name="categories")
    name = models.CharField(max_length=255)  # e.g., "Grills", "Drinks", "Desserts"
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["display_order", "id"]
        verbose_name_plural = "categories"

    def __str__(self):
        return f"{self.restaurant.name} - {self.name}"


class MenuItemQuerySet(models.QuerySet):
    def available(self):
        return self.filter(is_available=True)


class MenuItem(models.Model):
    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE, related_name="menu_items")
    # items survive their category being removed
    category = models.ForeignKey(
        Category, on_delete=models.SET_NULL, null=True, blank=True, related_name="items"
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    image_url = models.URLField(max_length=500, blank=True, default="")
    image_public_id = models.CharField(max_length=255, blank=True, default="")
    is_available = models.BooleanField(default=True)
    display_order = models.PositiveIntegerField(default=0)

    objects = MenuItemQuerySet.as_manager()

    class Meta:
        ordering = ["display_order", "id"]

    def __str__(self):
        return self.name


class Size(models.Model):
    """A selected size replaces the item's base price."""
    menu_item = models.ForeignKey(MenuItem, on_delete=models.CASCADE, related_name="sizes")
    name = models.CharField(max_length=100)  # e.g., "Small", "Large"
    price = models.DecimalField(max_digits=10, decimal_places=2)
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["display_order", "id"]

    def __str__(self):
        return f"{self.menu_item.name} - {self.name}"


class Extra(models.Model):
    """Restaurant wide add-on, added on top of whatever size is chosen."""
    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE, related_name="extras")
    name = models.CharField(max_length=100)  # e.g., "Cheese", "Sauce"
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    is_available = models.BooleanField(default=True)
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["display_order", "id"]

    def __str__(self):
        return self.name
