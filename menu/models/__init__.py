from .main import Category, MenuItem, Size, Extra  # noqa: F401
from .order import Order  # noqa: F401
