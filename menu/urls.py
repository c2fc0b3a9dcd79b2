from django.urls import path, include
from . import views

cart_urls = [
    path("", views.CartView.as_view(), name="cart"),
    path("items/", views.CartItemsView.as_view(), name="cart-items"),
    path("configure/", views.CartConfigureView.as_view(), name="cart-configure"),
    path("selection/", views.CartSelectionView.as_view(), name="cart-selection"),
    path("checkout/", views.CheckoutView.as_view(), name="cart-checkout"),
]

manage_urls = [
    path("categories/", views.CategoryListCreateView.as_view(), name="manage-categories"),
    path("categories/<int:pk>/", views.CategoryDetailView.as_view(), name="manage-category-detail"),
    path("items/", views.MenuItemListCreateView.as_view(), name="manage-items"),
    path("items/<int:pk>/", views.MenuItemDetailView.as_view(), name="manage-item-detail"),
    path("items/<int:item_pk>/sizes/", views.SizeListCreateView.as_view(), name="manage-sizes"),
    path("items/<int:item_pk>/sizes/<int:pk>/", views.SizeDetailView.as_view(), name="manage-size-detail"),
    path("extras/", views.ExtraListCreateView.as_view(), name="manage-extras"),
    path("extras/<int:pk>/", views.ExtraDetailView.as_view(), name="manage-extra-detail"),
]

order_urls = [
    path("", views.RestaurantOrderListView.as_view(), name="restaurant-orders"),
    path("<int:pk>/", views.RestaurantOrderDetailView.as_view(), name="restaurant-order-detail"),
]

urlpatterns = [
    path("<str:username>/", views.StorefrontView.as_view(), name="storefront"),
    path("<str:username>/branches/", views.BranchesView.as_view(), name="storefront-branches"),
    path("<str:username>/share/", views.ShareView.as_view(), name="storefront-share"),
    path("<str:username>/qr-code/", views.QRCodeView.as_view(), name="storefront-qr-code"),
    path("<str:username>/cart/", include(cart_urls)),
    path("<str:username>/manage/", include(manage_urls)),
    path("<str:username>/orders/", include(order_urls)),
]
