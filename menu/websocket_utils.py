"""
WebSocket broadcasting utilities
"""
from channels.layers import get_channel_layer
from asgiref.sync import async_to_sync


def get_restaurant_orders_group_name(username):
    """Get group name for a restaurant's order screen"""
    return f"restaurant_{username}_orders"


def broadcast_order_update(username, event_data):
    """Push an order change to every open orders screen of the owner"""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    async_to_sync(channel_layer.group_send)(
        get_restaurant_orders_group_name(username),
        {
            "type": "order_update",
            "data": event_data
        }
    )
