from django.shortcuts import get_object_or_404
from rest_framework import generics

from authflow.decorators import owner_authentication
from ..models import Category, MenuItem, Size, Extra
from ..serializers.management import (
    CategorySerializer, MenuItemSerializer, SizeSerializer, ExtraSerializer,
)


class OwnedQuerysetMixin:
    """Scope every queryset to the restaurant resolved by IsRestaurantOwner."""
    model = None

    def get_queryset(self):
        return self.model.objects.filter(restaurant=self.request.restaurant)

    def perform_create(self, serializer):
        serializer.save(restaurant=self.request.restaurant)


@owner_authentication
class CategoryListCreateView(OwnedQuerysetMixin, generics.ListCreateAPIView):
    """
    GET/POST /api/menu/<username>/manage/categories/
    """
    model = Category
    serializer_class = CategorySerializer


@owner_authentication
class CategoryDetailView(OwnedQuerysetMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET/PATCH/DELETE /api/menu/<username>/manage/categories/<pk>/
    Deleting a category leaves its items uncategorised.
    """
    model = Category
    serializer_class = CategorySerializer


class MenuItemMixin(OwnedQuerysetMixin):
    model = MenuItem
    serializer_class = MenuItemSerializer

    def get_queryset(self):
        return super().get_queryset().select_related("category").prefetch_related("sizes")

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["restaurant"] = getattr(self.request, "restaurant", None)
        return context


@owner_authentication
class MenuItemListCreateView(MenuItemMixin, generics.ListCreateAPIView):
    """
    GET/POST /api/menu/<username>/manage/items/
    Optional filter: ?category=<id>
    """

    def get_queryset(self):
        qs = super().get_queryset()
        category = self.request.query_params.get("category")
        if category and category.isdigit():
            qs = qs.filter(category_id=category)
        return qs


@owner_authentication
class MenuItemDetailView(MenuItemMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET/PATCH/DELETE /api/menu/<username>/manage/items/<pk>/
    Deleting an item queues its image for removal.
    """


class SizeMixin:
    serializer_class = SizeSerializer

    def get_menu_item(self):
        return get_object_or_404(MenuItem, pk=self.kwargs["item_pk"], restaurant=self.request.restaurant)

    def get_queryset(self):
        return Size.objects.filter(
            menu_item_id=self.kwargs["item_pk"],
            menu_item__restaurant=self.request.restaurant,
        )


@owner_authentication
class SizeListCreateView(SizeMixin, generics.ListCreateAPIView):
    """
    GET/POST /api/menu/<username>/manage/items/<item_pk>/sizes/
    """

    def list(self, request, *args, **kwargs):
        self.get_menu_item()
        return super().list(request, *args, **kwargs)

    def perform_create(self, serializer):
        serializer.save(menu_item=self.get_menu_item())


@owner_authentication
class SizeDetailView(SizeMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET/PATCH/DELETE /api/menu/<username>/manage/items/<item_pk>/sizes/<pk>/
    """


@owner_authentication
class ExtraListCreateView(OwnedQuerysetMixin, generics.ListCreateAPIView):
    """
    GET/POST /api/menu/<username>/manage/extras/
    """
    model = Extra
    serializer_class = ExtraSerializer


@owner_authentication
class ExtraDetailView(OwnedQuerysetMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET/PATCH/DELETE /api/menu/<username>/manage/extras/<pk>/
    """
    model = Extra
    serializer_class = ExtraSerializer
