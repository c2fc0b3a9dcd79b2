import logging

from celery import shared_task
from django.db import transaction

from .cloudinary import CloudinaryClient

logger = logging.getLogger(__name__)


@shared_task(name='uploads.delete_media_asset')
def delete_media_asset(public_id):
    """
    Remove an image that was replaced or whose owner row was deleted.
    Never retried, an orphaned asset is harmless.
    """
    if not public_id:
        return False
    deleted = CloudinaryClient().destroy(public_id)
    if not deleted:
        logger.warning("orphaned media asset left behind: %s", public_id)
    return deleted


def schedule_delete(public_id):
    """Queue the delete once the surrounding transaction has committed."""
    if public_id:
        transaction.on_commit(lambda: delete_media_asset.delay(public_id))
