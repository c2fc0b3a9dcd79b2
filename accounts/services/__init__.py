from .bootstrap import ensure_restaurant_exists, BootstrapResult  # noqa: F401
from .session import SessionContext  # noqa: F401
