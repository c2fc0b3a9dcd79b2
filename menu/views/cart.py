from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.models import Branch, DeliveryArea
from ..cart import ProductConfiguration, ConfigurationError
from ..cart_store import CartStore
from ..dispatch import OrderDispatch, CustomerDetails, DispatchError
from ..models import MenuItem, Extra
from ..serializers.input_ser.cart_in import (
    CartItemInputSerializer, CartRemoveSerializer, CartSelectionSerializer, CheckoutSerializer,
)
from ..services import StorefrontService


class CartBaseView(APIView):
    """Cart state lives in the visitor's session, one cart per storefront."""
    permission_classes = [permissions.AllowAny]

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.restaurant = StorefrontService.get_restaurant(kwargs["username"])
        self.store = CartStore(request.session)
        self.cart = self.store.load(self.restaurant.username)

    def save_and_respond(self, status_code=status.HTTP_200_OK):
        self.store.save(self.restaurant.username, self.cart)
        return Response(self.cart.summary(), status=status_code)

    def apply_selection(self, data):
        """Select branch / area when present in the payload."""
        if "branch_id" in data:
            branch = None
            if data["branch_id"] is not None:
                branch = get_object_or_404(
                    Branch, pk=data["branch_id"], restaurant=self.restaurant, is_active=True
                )
            self.cart.select_branch(branch)
        if "area_id" in data:
            area = None
            if data["area_id"] is not None:
                area = get_object_or_404(
                    DeliveryArea, pk=data["area_id"], branch__restaurant=self.restaurant, is_active=True
                )
            self.cart.select_area(area)

    def build_configuration(self, data):
        item = get_object_or_404(
            MenuItem, pk=data["menu_item_id"], restaurant=self.restaurant, is_available=True
        )
        extras = Extra.objects.filter(restaurant=self.restaurant, is_available=True)
        config = ProductConfiguration(item, sizes=item.sizes.all(), extras=extras)
        if data.get("size_id") is not None:
            config.select_size(data["size_id"])
        # extra_ids is a set of choices; a repeated id must not toggle it back off
        for extra_id in dict.fromkeys(data.get("extra_ids") or []):
            config.toggle_extra(extra_id)
        config.set_quantity(data.get("quantity") or 1)
        return config


class CartView(CartBaseView):
    """
    GET    /api/menu/<username>/cart/
    DELETE /api/menu/<username>/cart/   empties the cart
    """

    def get(self, request, username):
        return Response(self.cart.summary())

    def delete(self, request, username):
        self.cart.clear()
        return self.save_and_respond()


class CartItemsView(CartBaseView):
    """
    POST   /api/menu/<username>/cart/items/   add a configured product
    DELETE /api/menu/<username>/cart/items/   remove one unit of a line
    """

    @extend_schema(request=CartItemInputSerializer, responses={201: OpenApiResponse(description="Updated cart")})
    def post(self, request, username):
        serializer = CartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            config = self.build_configuration(serializer.validated_data)
            config.confirm(self.cart)
        except ConfigurationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return self.save_and_respond(status.HTTP_201_CREATED)

    @extend_schema(request=CartRemoveSerializer, responses={200: OpenApiResponse(description="Updated cart")})
    def delete(self, request, username):
        serializer = CartRemoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        self.cart.remove_from_cart(data["item_id"], data.get("size_id"), data.get("extras_key"))
        return self.save_and_respond()


class CartConfigureView(CartBaseView):
    """
    POST /api/menu/<username>/cart/configure/
    Prices a product configuration without touching the cart.
    """

    @extend_schema(request=CartItemInputSerializer, responses={200: OpenApiResponse(description="Dialog state")})
    def post(self, request, username):
        serializer = CartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            config = self.build_configuration(serializer.validated_data)
        except ConfigurationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(config.state())


class CartSelectionView(CartBaseView):
    """
    PATCH /api/menu/<username>/cart/selection/
    {"branch_id": 1, "area_id": 3}; changing branch resets the area.
    """

    @extend_schema(request=CartSelectionSerializer, responses={200: OpenApiResponse(description="Updated cart")})
    def patch(self, request, username):
        serializer = CartSelectionSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            self.apply_selection(serializer.validated_data)
        except ConfigurationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return self.save_and_respond()


class CheckoutView(CartBaseView):
    """
    POST /api/menu/<username>/cart/checkout/
    Returns {"whatsapp_url": ...} and clears the cart, or 400 with `missing`.
    Nothing is stored server side.
    """

    @extend_schema(
        request=CheckoutSerializer,
        responses={200: OpenApiResponse(description="wa.me url"),
                   400: OpenApiResponse(description="Missing order details")},
    )
    def post(self, request, username):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            self.apply_selection({k: data[k] for k in ("branch_id", "area_id") if k in data})
        except ConfigurationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        dispatcher = OrderDispatch(
            self.restaurant,
            branches=StorefrontService.active_branches(self.restaurant),
            areas_by_branch=StorefrontService.active_areas_by_branch(self.restaurant),
        )
        try:
            url = dispatcher.dispatch(self.cart, CustomerDetails.from_data(data))
        except DispatchError as exc:
            # keep the branch/area the customer already picked
            self.store.save(self.restaurant.username, self.cart)
            return Response(
                {"detail": "Please complete the order details", "missing": exc.missing},
                status=status.HTTP_400_BAD_REQUEST,
            )

        self.store.clear(self.restaurant.username)
        return Response({"whatsapp_url": url})
