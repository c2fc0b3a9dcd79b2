from django.urls import path
from .views import ImageUploadView

urlpatterns = [
    path("<str:username>/<str:purpose>/", ImageUploadView.as_view(), name="image-upload"),
]
