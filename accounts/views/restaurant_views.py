import logging

from django.db import IntegrityError, transaction
from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import permissions, status
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from accounts.models import Restaurant
from accounts.serializers.input_ser.restaurant_in import RestaurantSerializer, FooterSerializer
from authflow.decorators import owner_authentication

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "This username is already taken"


def username_conflict():
    return Response({"detail": USERNAME_TAKEN}, status=status.HTTP_409_CONFLICT)


class RestaurantCreateView(GenericAPIView):
    """
    POST /api/accounts/restaurants/
    Dashboard create path for owners that have no restaurant yet.
    """
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = RestaurantSerializer

    @extend_schema(responses={201: RestaurantSerializer, 409: OpenApiResponse(description=USERNAME_TAKEN)})
    def post(self, request):
        if Restaurant.objects.filter(owner=request.user).exists():
            return Response({"detail": "You already have a restaurant"}, status=status.HTTP_400_BAD_REQUEST)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            with transaction.atomic():
                restaurant = serializer.save(owner=request.user)
        except IntegrityError:
            if Restaurant.objects.filter(username=serializer.validated_data["username"]).exists():
                return username_conflict()
            raise
        logger.info("restaurant %s created from dashboard", restaurant.username)
        return Response(self.get_serializer(restaurant).data, status=status.HTTP_201_CREATED)


@owner_authentication
class RestaurantDetailView(GenericAPIView):
    """
    GET/PATCH /api/accounts/restaurants/<username>/
    """
    serializer_class = RestaurantSerializer

    def get(self, request, username):
        return Response(self.get_serializer(request.restaurant).data)

    @extend_schema(responses={200: RestaurantSerializer, 409: OpenApiResponse(description=USERNAME_TAKEN)})
    def patch(self, request, username):
        serializer = self.get_serializer(request.restaurant, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        new_username = serializer.validated_data.get("username")
        if new_username and new_username != request.restaurant.username and \
                Restaurant.objects.filter(username=new_username).exists():
            return username_conflict()

        try:
            with transaction.atomic():
                restaurant = serializer.save()
        except IntegrityError:
            # lost a race for the same username
            return username_conflict()
        return Response(self.get_serializer(restaurant).data)


@owner_authentication
class FooterView(GenericAPIView):
    """
    GET/PATCH /api/accounts/restaurants/<username>/footer/
    Address, email, social links and working hours shown in the storefront footer.
    """
    serializer_class = FooterSerializer

    def get(self, request, username):
        return Response(self.get_serializer(request.restaurant).data)

    def patch(self, request, username):
        serializer = self.get_serializer(request.restaurant, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)
