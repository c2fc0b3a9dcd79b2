from .storefront import StorefrontView, BranchesView, ShareView, QRCodeView  # noqa: F401
from .cart import (  # noqa: F401
    CartView, CartItemsView, CartConfigureView, CartSelectionView, CheckoutView,
)
from .management import (  # noqa: F401
    CategoryListCreateView, CategoryDetailView, MenuItemListCreateView, MenuItemDetailView,
    SizeListCreateView, SizeDetailView, ExtraListCreateView, ExtraDetailView,
)
from .order import RestaurantOrderListView, RestaurantOrderDetailView  # noqa: F401
