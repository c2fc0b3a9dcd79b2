from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from uploads.tasks import schedule_delete
from .models import MenuItem, Order
from .websocket_utils import broadcast_order_update


@receiver(post_delete, sender=MenuItem)
def delete_menu_item_image(sender, instance, **kwargs):
    schedule_delete(instance.image_public_id)


@receiver(post_save, sender=Order)
def announce_new_order(sender, instance, created, **kwargs):
    if created:
        broadcast_order_update(instance.restaurant.username, {
            "event": "order_created",
            "order_id": instance.pk,
            "status": instance.status,
            "customer_name": instance.customer_name,
            "total_price": str(instance.total_price),
        })
