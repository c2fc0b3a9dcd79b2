from django.contrib import admin

from .models import Category, MenuItem, Size, Extra, Order


class SizeInline(admin.TabularInline):
    model = Size
    extra = 0


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("name", "restaurant", "category", "price", "is_available", "display_order")
    list_filter = ("is_available",)
    search_fields = ("name", "restaurant__username")
    inlines = [SizeInline]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "restaurant", "customer_name", "total_price", "status", "is_confirmed", "created_at")
    list_filter = ("status", "is_confirmed")
    readonly_fields = ("items", "created_at", "updated_at")


admin.site.register(Category)
admin.site.register(Extra)
