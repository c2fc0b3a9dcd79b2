from django.urls import path, include
from .views import (
    SignUpView, ConfirmEmailView, ResendConfirmationView, SignInView, SessionView, BootstrapView,
    RestaurantCreateView, RestaurantDetailView, FooterView,
    BranchListCreateView, BranchDetailView, DeliveryAreaListCreateView, DeliveryAreaDetailView,
    jwt_views
)

token_urls = [
    path("refresh/", jwt_views.RefreshTokenView.as_view(), name="refresh"),
    path("sign-out/", jwt_views.SignOutView.as_view(), name="sign-out"),
]

branch_urls = [
    path("", BranchListCreateView.as_view(), name="branches"),
    path("<int:pk>/", BranchDetailView.as_view(), name="branch-detail"),
    path("<int:branch_pk>/areas/", DeliveryAreaListCreateView.as_view(), name="delivery-areas"),
    path("<int:branch_pk>/areas/<int:pk>/", DeliveryAreaDetailView.as_view(), name="delivery-area-detail"),
]

restaurant_urls = [
    path("", RestaurantCreateView.as_view(), name="restaurant-create"),
    path("<str:username>/", RestaurantDetailView.as_view(), name="restaurant-detail"),
    path("<str:username>/footer/", FooterView.as_view(), name="restaurant-footer"),
    path("<str:username>/branches/", include(branch_urls)),
]

urlpatterns = [
    path("sign-up/", SignUpView.as_view(), name="sign-up"),
    path("sign-in/", SignInView.as_view(), name="sign-in"),
    path("confirm-email/", ConfirmEmailView.as_view(), name="confirm-email"),
    path("confirm-email/resend/", ResendConfirmationView.as_view(), name="confirm-email-resend"),
    path("session/", SessionView.as_view(), name="session"),
    path("bootstrap/", BootstrapView.as_view(), name="bootstrap"),
    path("restaurants/", include(restaurant_urls)),
    path("", include(token_urls)),
]
