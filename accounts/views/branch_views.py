from django.shortcuts import get_object_or_404
from rest_framework import generics

from accounts.models import Branch, DeliveryArea
from accounts.serializers.input_ser.restaurant_in import BranchSerializer, DeliveryAreaSerializer
from authflow.decorators import owner_authentication


class BranchMixin:
    serializer_class = BranchSerializer

    def get_queryset(self):
        return Branch.objects.filter(restaurant=self.request.restaurant).prefetch_related("delivery_areas")


@owner_authentication
class BranchListCreateView(BranchMixin, generics.ListCreateAPIView):
    """
    GET/POST /api/accounts/restaurants/<username>/branches/
    Includes inactive branches; the storefront only shows active ones.
    """

    def perform_create(self, serializer):
        serializer.save(restaurant=self.request.restaurant)


@owner_authentication
class BranchDetailView(BranchMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET/PATCH/DELETE /api/accounts/restaurants/<username>/branches/<pk>/
    Deleting a branch removes its delivery areas.
    """


class DeliveryAreaMixin:
    serializer_class = DeliveryAreaSerializer

    def get_branch(self):
        return get_object_or_404(Branch, pk=self.kwargs["branch_pk"], restaurant=self.request.restaurant)

    def get_queryset(self):
        return DeliveryArea.objects.filter(
            branch_id=self.kwargs["branch_pk"],
            branch__restaurant=self.request.restaurant,
        )


@owner_authentication
class DeliveryAreaListCreateView(DeliveryAreaMixin, generics.ListCreateAPIView):
    """
    GET/POST /api/accounts/restaurants/<username>/branches/<branch_pk>/areas/
    """

    def list(self, request, *args, **kwargs):
        self.get_branch()
        return super().list(request, *args, **kwargs)

    def perform_create(self, serializer):
        serializer.save(branch=self.get_branch())


@owner_authentication
class DeliveryAreaDetailView(DeliveryAreaMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET/PATCH/DELETE /api/accounts/restaurants/<username>/branches/<branch_pk>/areas/<pk>/
    """
