from .auth_views import (  # noqa: F401
    SignUpView, ConfirmEmailView, ResendConfirmationView, SignInView, SessionView, BootstrapView,
)
from .restaurant_views import RestaurantCreateView, RestaurantDetailView, FooterView  # noqa: F401
from .branch_views import (  # noqa: F401
    BranchListCreateView, BranchDetailView, DeliveryAreaListCreateView, DeliveryAreaDetailView,
)
import accounts.views.jwt_views  # noqa: F401
