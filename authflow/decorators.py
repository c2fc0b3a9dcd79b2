from rest_framework.permissions import IsAuthenticated

from .authentication import CustomJWTAuth
from .permissions import IsRestaurantOwner


def owner_authentication(view_class):
    """
    Class decorator to apply CustomJWTAuth + owner checks
    to any APIView subclass routed under <username>.
    """
    class Wrapped(view_class):
        authentication_classes = [CustomJWTAuth]
        permission_classes = [IsAuthenticated, IsRestaurantOwner]

    Wrapped.__name__ = view_class.__name__
    Wrapped.__qualname__ = view_class.__qualname__
    Wrapped.__doc__ = view_class.__doc__
    Wrapped.__module__ = view_class.__module__
    return Wrapped
