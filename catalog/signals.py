"""Django signals for cache invalidation."""

import logging

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from catalog.domain import City
from catalog.models import Event
from catalog.stores.django_store import event_list_cache_key

logger = logging.getLogger(__name__)


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate cached city catalogs when an event is saved or deleted.

    Every city is cleared because an update may have moved the event.
    """
    cache.delete_many([event_list_cache_key(city) for city in City])
    logger.debug("Invalidated catalog cache after change to %s", instance.pk)
