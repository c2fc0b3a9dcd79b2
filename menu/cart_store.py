from .cart import Cart

SESSION_KEY = "carts"


class CartStore:
    """
    Keeps one cart per storefront in the visitor's session.
    Usage:
        store = CartStore(request.session)
        cart = store.load(username)
        ...
        store.save(username, cart)
    """

    def __init__(self, session):
        self.session = session

    def load(self, username) -> Cart:
        return Cart.from_dict(self.session.get(SESSION_KEY, {}).get(username))

    def save(self, username, cart: Cart):
        carts = dict(self.session.get(SESSION_KEY, {}))
        carts[username] = cart.to_dict()
        self.session[SESSION_KEY] = carts
        self.session.modified = True

    def clear(self, username):
        carts = dict(self.session.get(SESSION_KEY, {}))
        if carts.pop(username, None) is not None:
            self.session[SESSION_KEY] = carts
            self.session.modified = True
