import logging

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import status
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response
from rest_framework.views import APIView

from authflow.decorators import owner_authentication
from menu.models import MenuItem
from .cloudinary import (
    CloudinaryClient, MediaUploadError, cover_public_id, logo_public_id,
    menu_item_public_id, cover_url, logo_url, menu_item_urls,
)
from .compression import InvalidImage
from .serializers import ImageUploadSerializer
from .tasks import schedule_delete

logger = logging.getLogger(__name__)

COVER, LOGO, MENU_ITEM = "cover", "logo", "menu-item"


@owner_authentication
class ImageUploadView(APIView):
    """
    POST /api/uploads/<username>/<purpose>/
    purpose: cover | logo | menu-item (with item_id)
    Uploads the image, stores the url on the row and queues the old asset for deletion.
    """
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        request=ImageUploadSerializer,
        responses={200: OpenApiResponse(description="Uploaded image urls"),
                   400: OpenApiResponse(description="Invalid file"),
                   502: OpenApiResponse(description="Image upload failed")},
    )
    def post(self, request, username, purpose):
        serializer = ImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        upload = serializer.validated_data["file"]
        restaurant = request.restaurant

        if purpose == COVER:
            target, url_field, id_field = restaurant, "cover_image_url", "cover_image_public_id"
            public_id = cover_public_id(restaurant.username)
        elif purpose == LOGO:
            target, url_field, id_field = restaurant, "logo_url", "logo_public_id"
            public_id = logo_public_id(restaurant.username)
        elif purpose == MENU_ITEM:
            item_id = serializer.validated_data.get("item_id")
            if not item_id:
                return Response({"detail": "item_id is required"}, status=status.HTTP_400_BAD_REQUEST)
            target = get_object_or_404(MenuItem, pk=item_id, restaurant=restaurant)
            url_field, id_field = "image_url", "image_public_id"
            public_id = menu_item_public_id(restaurant.username, target.pk)
        else:
            return Response({"detail": "Unknown upload purpose"}, status=status.HTTP_404_NOT_FOUND)

        try:
            result = CloudinaryClient().upload(upload, public_id)
        except InvalidImage as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except MediaUploadError:
            logger.exception("upload failed for %s/%s", restaurant.username, purpose)
            return Response({"detail": "Image upload failed"}, status=status.HTTP_502_BAD_GATEWAY)

        old_public_id = getattr(target, id_field)
        setattr(target, url_field, result["secure_url"])
        setattr(target, id_field, result["public_id"])
        target.save(update_fields=[url_field, id_field])
        if old_public_id and old_public_id != result["public_id"]:
            schedule_delete(old_public_id)

        url = result["secure_url"]
        if purpose == COVER:
            variants = {"cover": cover_url(url)}
        elif purpose == LOGO:
            variants = {"logo": logo_url(url)}
        else:
            variants = menu_item_urls(url)

        return Response({
            "url": url,
            "public_id": result["public_id"],
            "variants": variants,
        }, status=status.HTTP_200_OK)
