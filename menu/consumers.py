import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import Restaurant
from menu.websocket_utils import get_restaurant_orders_group_name

logger = logging.getLogger(__name__)


class BaseConsumer(AsyncWebsocketConsumer):
    """Base consumer with authentication utilities"""

    async def authenticate_user(self, token):
        """Authenticate user from JWT access token"""
        if not token:
            return AnonymousUser()
        try:
            user_id = AccessToken(token)['user_id']
        except (TokenError, KeyError):
            logger.info("websocket rejected an invalid token")
            return AnonymousUser()

        User = get_user_model()

        @database_sync_to_async
        def get_user():
            try:
                return User.objects.get(id=user_id, is_active=True)
            except User.DoesNotExist:
                return AnonymousUser()

        return await get_user()


class RestaurantOrdersConsumer(BaseConsumer):
    """
    ws/restaurants/<username>/orders/
    Owner only. Receives {"type": "order_update", "data": {...}} events.
    """

    async def connect(self):
        self.username = self.scope['url_route']['kwargs']['username']
        self.group_name = get_restaurant_orders_group_name(self.username)
        self.joined = False

        user = await self.authenticate_user(self.scope.get('token'))
        if not user.is_authenticated:
            await self.close(code=4001)
            return

        if not await self.owns_restaurant(user, self.username):
            await self.close(code=4003)
            return

        self.scope['user'] = user
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        self.joined = True
        await self.accept()

    async def disconnect(self, close_code):
        if getattr(self, 'joined', False):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        # read only stream, answer pings so clients can keep the socket alive
        try:
            payload = json.loads(text_data or '{}')
        except json.JSONDecodeError:
            return
        if payload.get('type') == 'ping':
            await self.send(text_data=json.dumps({'type': 'pong'}))

    async def order_update(self, event):
        await self.send(text_data=json.dumps({
            'type': 'order_update',
            'data': event['data'],
        }))

    @database_sync_to_async
    def owns_restaurant(self, user, username):
        return Restaurant.objects.filter(username=username, owner=user).exists()
