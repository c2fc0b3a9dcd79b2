from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User, Restaurant, PendingRestaurant, Branch, DeliveryArea


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    ordering = ("email",)
    list_display = ("email", "email_confirmed", "is_active", "is_staff", "date_joined")
    list_filter = ("email_confirmed", "is_active", "is_staff")
    search_fields = ("email",)
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Status", {"fields": ("email_confirmed", "is_active", "is_staff", "is_superuser")}),
        ("Permissions", {"fields": ("groups", "user_permissions")}),
        ("Dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "password1", "password2")}),
    )


class BranchInline(admin.TabularInline):
    model = Branch
    extra = 0


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    list_display = ("name", "username", "owner", "whatsapp_phone", "created_at")
    search_fields = ("name", "username", "owner__email")
    inlines = [BranchInline]


class DeliveryAreaInline(admin.TabularInline):
    model = DeliveryArea
    extra = 0


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("name", "restaurant", "is_active", "display_order")
    list_filter = ("is_active",)
    inlines = [DeliveryAreaInline]


admin.site.register(PendingRestaurant)
