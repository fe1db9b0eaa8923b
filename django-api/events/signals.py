"""Django signals for slug assignment.

The slug is derived from the title inside the write, on every save path
(store, admin, shell), and only when the title changed.
"""

import logging

from django.core.exceptions import ValidationError
from django.db.models.signals import pre_save
from django.dispatch import receiver

from events.domain.slugs import base_slug, collision_pattern, next_slug, shorten_base
from events.domain.value_objects import SLUG_MAX_LENGTH
from events.models import Event

logger = logging.getLogger(__name__)

EMPTY_SLUG_MESSAGE = "Title must contain at least one letter or digit"


def _title_changed(instance: Event, using: str) -> bool:
    if instance._state.adding:
        return True
    previous = (
        Event._default_manager.using(using)
        .filter(pk=instance.pk)
        .values_list("title", flat=True)
        .first()
    )
    return previous is None or previous != instance.title


def _taken_slugs(sender, instance, using: str, base: str) -> list[str]:
    return list(
        sender._default_manager.using(using)
        .filter(slug__iregex=collision_pattern(base))
        .exclude(pk=instance.pk)
        .values_list("slug", flat=True)
    )


@receiver(pre_save, sender=Event)
def assign_event_slug(sender, instance, using, raw=False, update_fields=None, **kwargs):
    """Give a new or retitled event the next free slug for its title."""
    if raw:
        return
    if update_fields is not None and "title" not in update_fields:
        return
    if not _title_changed(instance, using):
        return

    base = base_slug(instance.title)
    if not base:
        raise ValidationError({"title": [EMPTY_SLUG_MESSAGE]})

    slug = next_slug(base, _taken_slugs(sender, instance, using, base))
    while len(slug) > SLUG_MAX_LENGTH:
        # Numbered slug overflows; retry with a shorter base.
        base = shorten_base(base, slug)
        slug = next_slug(base, _taken_slugs(sender, instance, using, base))
    instance.slug = slug
    logger.debug("Assigned slug %s to event %s", instance.slug, instance.pk)
