from django.http import HttpResponse
from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers.output_ser.response import serialize_storefront, BranchOutSerializer
from ..services import StorefrontService
from ..sharing import share_links, qr_code_png, qr_filename, storefront_url


class StorefrontView(APIView):
    """
    GET /api/menu/<username>/
    Public storefront: restaurant, categories, available items with sizes,
    available extras and active branches with their delivery areas.
    """
    permission_classes = [permissions.AllowAny]

    @extend_schema(responses={200: OpenApiResponse(description="Storefront payload"),
                              404: OpenApiResponse(description="Unknown restaurant")})
    def get(self, request, username):
        storefront = StorefrontService.load(username, public=True)
        is_owner = bool(
            request.user.is_authenticated
            and storefront.restaurant.owner_id == request.user.pk
        )
        return Response(serialize_storefront(storefront, is_owner=is_owner))


class BranchesView(APIView):
    """
    GET /api/menu/<username>/branches/
    Active branches with contact numbers and delivery areas.
    """
    permission_classes = [permissions.AllowAny]

    @extend_schema(responses=BranchOutSerializer(many=True))
    def get(self, request, username):
        restaurant = StorefrontService.get_restaurant(username)
        branches = StorefrontService.active_branches(restaurant)
        context = {"areas_by_branch": StorefrontService.active_areas_by_branch(restaurant)}
        return Response(BranchOutSerializer(branches, many=True, context=context).data)


class ShareView(APIView):
    """
    GET /api/menu/<username>/share/
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request, username):
        restaurant = StorefrontService.get_restaurant(username)
        return Response(share_links(restaurant))


class QRCodeView(APIView):
    """
    GET /api/menu/<username>/qr-code/
    PNG download of the storefront url.
    """
    permission_classes = [permissions.AllowAny]

    @extend_schema(responses={(200, "image/png"): OpenApiResponse(description="QR code PNG")})
    def get(self, request, username):
        restaurant = StorefrontService.get_restaurant(username)
        response = HttpResponse(qr_code_png(storefront_url(restaurant.username)), content_type="image/png")
        response["Content-Disposition"] = f'attachment; filename="{qr_filename(restaurant.username)}"'
        return response
