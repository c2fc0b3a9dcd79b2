from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.core.validators import RegexValidator
from django.db import models
from django.utils import timezone

USERNAME_PATTERN = r"^[a-zA-Z0-9_-]+$"
username_validator = RegexValidator(
    USERNAME_PATTERN,
    "Username may only contain letters, numbers, underscores and hyphens.",
)

DEFAULT_WORKING_HOURS = "Daily from 9 AM to 11 PM"


class UserManager(BaseUserManager):
    def create_user(self, email=None, password=None, **extra_fields):
        if not email:
            raise ValueError("User must have an email")

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("email_confirmed", True)
        if not password:
            raise ValueError("Admins must have a password")
        return self.create_user(email=email, password=password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    email = models.EmailField(unique=True)
    email_confirmed = models.BooleanField(default=False)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    date_joined = models.DateTimeField(default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    def __str__(self):
        return self.email


class Restaurant(models.Model):
    owner = models.OneToOneField(User, on_delete=models.CASCADE, related_name="restaurant")
    name = models.CharField(max_length=255)
    # public storefront handle, used in every url
    username = models.CharField(max_length=64, unique=True, validators=[username_validator])
    description = models.TextField(blank=True, default="")

    cover_image_url = models.URLField(max_length=500, blank=True, default="")
    cover_image_public_id = models.CharField(max_length=255, blank=True, default="")
    logo_url = models.URLField(max_length=500, blank=True, default="")
    logo_public_id = models.CharField(max_length=255, blank=True, default="")

    phone = models.CharField(max_length=30, blank=True, default="")
    whatsapp_phone = models.CharField(max_length=30, blank=True, default="")
    delivery_phone = models.CharField(max_length=30, blank=True, default="")
    complaints_phone = models.CharField(max_length=30, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    address = models.CharField(max_length=500, blank=True, default="")

    facebook_url = models.URLField(max_length=500, blank=True, default="")
    instagram_url = models.URLField(max_length=500, blank=True, default="")
    working_hours = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    @property
    def display_working_hours(self):
        return self.working_hours or DEFAULT_WORKING_HOURS


class Branch(models.Model):
    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE, related_name="branches")
    name = models.CharField(max_length=200)
    address = models.CharField(max_length=500, blank=True, default="")
    phone = models.CharField(max_length=30, blank=True, default="")
    whatsapp_phone = models.CharField(max_length=30, blank=True, default="")
    delivery_phone = models.CharField(max_length=30, blank=True, default="")
    working_hours = models.CharField(max_length=255, blank=True, default="")

    is_active = models.BooleanField(default=True)
    display_order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["display_order", "id"]
        verbose_name_plural = "branches"

    def __str__(self):
        return self.name


class DeliveryArea(models.Model):
    branch = models.ForeignKey(Branch, on_delete=models.CASCADE, related_name="delivery_areas")
    name = models.CharField(max_length=200)
    delivery_price = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    is_active = models.BooleanField(default=True)
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["display_order", "id"]

    def __str__(self):
        return f"{self.branch.name} - {self.name}"
