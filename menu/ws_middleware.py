"""
WebSocket authentication middleware
"""
from urllib.parse import parse_qs

from channels.middleware import BaseMiddleware
from django.contrib.auth.models import AnonymousUser

BEARER_PREFIX = b"bearer "


def token_from_scope(scope):
    """
    Access token of an orders screen connection, or None.
    Browsers cannot set headers on a websocket, so `?token=` is checked first
    and the Authorization header second.
    """
    params = parse_qs(scope.get("query_string", b"").decode())
    token = (params.get("token") or [None])[0]
    if token:
        return token

    for name, value in scope.get("headers", []):
        if name.lower() == b"authorization" and value.lower().startswith(BEARER_PREFIX):
            return value[len(BEARER_PREFIX):].decode().strip() or None
    return None


class TokenAuthMiddleware(BaseMiddleware):
    """
    Only extracts the token; RestaurantOrdersConsumer verifies it and
    checks ownership before accepting.
    """

    async def __call__(self, scope, receive, send):
        scope["token"] = token_from_scope(scope)
        # consumers replace this once the token is verified
        scope["user"] = AnonymousUser()
        return await super().__call__(scope, receive, send)
