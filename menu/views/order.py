from drf_spectacular.utils import extend_schema
from rest_framework import generics, status
from rest_framework.response import Response

from authflow.decorators import owner_authentication
from ..models import Order
from ..pagifications import StandardResultsSetPagination
from ..serializers.order import OrderSerializer, OrderUpdateSerializer
from ..services import OrderService


@owner_authentication
class RestaurantOrderListView(generics.ListAPIView):
    """
    GET /api/menu/<username>/orders/
    Newest first. Optional filter: ?status=pending
    """
    serializer_class = OrderSerializer
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        qs = Order.objects.filter(restaurant=self.request.restaurant).order_by("-created_at", "-id")
        order_status = self.request.query_params.get("status")
        if order_status:
            qs = qs.filter(status=order_status)
        return qs


@owner_authentication
class RestaurantOrderDetailView(generics.RetrieveAPIView):
    """
    GET   /api/menu/<username>/orders/<pk>/
    PATCH /api/menu/<username>/orders/<pk>/   {"status": "...", "is_confirmed": true}
    Changes are pushed to the owner's orders websocket.
    """
    serializer_class = OrderSerializer

    def get_queryset(self):
        return Order.objects.filter(restaurant=self.request.restaurant).select_related("restaurant")

    @extend_schema(request=OrderUpdateSerializer, responses=OrderSerializer)
    def patch(self, request, username, pk):
        order = self.get_object()
        serializer = OrderUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.update_status(
            order,
            status=serializer.validated_data.get("status"),
            is_confirmed=serializer.validated_data.get("is_confirmed"),
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)
