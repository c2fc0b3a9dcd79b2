"""
WebSocket URL routing
"""
from django.urls import re_path
from menu import consumers

websocket_urlpatterns = [
    # Order screen of a restaurant owner
    re_path(r'ws/restaurants/(?P<username>[a-zA-Z0-9_-]+)/orders/$', consumers.RestaurantOrdersConsumer.as_asgi()),
]
