from django.http import Http404
from django.shortcuts import get_object_or_404
from rest_framework import permissions

from accounts.models import Restaurant


def get_owned_restaurant(request, username):
    """
    Resolve the restaurant addressed by the url and make sure the caller owns it.
    Anything else is reported as not found so other tenants stay invisible.
    """
    restaurant = get_object_or_404(Restaurant, username=username)
    if not request.user.is_authenticated or restaurant.owner_id != request.user.pk:
        raise Http404
    return restaurant


class IsRestaurantOwner(permissions.BasePermission):
    """
    Usage:
        permission_classes = [IsAuthenticated, IsRestaurantOwner]
    The view must be routed with a `username` kwarg. The resolved restaurant is
    cached on the request as `request.restaurant`.
    """
    def has_permission(self, request, view):
        username = view.kwargs.get("username")
        if username is None:
            return False
        request.restaurant = get_owned_restaurant(request, username)
        return True

