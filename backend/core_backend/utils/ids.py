"""
Identifier generation for waiting transactions, cross-device requests and
audit rows.

Request ids look like ``PBR-20250114183022-9F3A61C2`` (prefix, local timestamp,
8 upper-case hex characters). Combined transaction ids are ``M`` followed by a
timestamp.

The generator class is configurable through
``settings.RESTAURANT_OPERATIONS["ID_GENERATOR"]`` so tests can plug in a
deterministic implementation.
"""
import functools
import itertools
import uuid

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils import timezone
from django.utils.module_loading import import_string


class TimestampIdGenerator:
    """Timestamp + random suffix ids."""

    SUFFIX_LENGTH = 8

    def new_id(self, prefix: str) -> str:
        stamp = timezone.localtime().strftime("%Y%m%d%H%M%S")
        suffix = uuid.uuid4().hex[: self.SUFFIX_LENGTH].upper()
        return f"{prefix}-{stamp}-{suffix}"

    def new_transaction_id(self) -> str:
        # Microseconds keep two combines in the same second apart
        return f"M{timezone.localtime().strftime('%Y%m%d%H%M%S%f')}"


class SequentialIdGenerator:
    """
    Deterministic ids (``PBR-000001``, ``M000002``...).

    Counters are per instance. The instance returned by get_id_generator()
    lives until RESTAURANT_OPERATIONS is changed.
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._counter):06d}"

    def new_transaction_id(self) -> str:
        return f"M{next(self._counter):06d}"


def get_id_generator():
    """Return the configured id generator (one shared instance per process)."""
    config = getattr(settings, "RESTAURANT_OPERATIONS", {})
    dotted_path = config.get("ID_GENERATOR", "core_backend.utils.ids.TimestampIdGenerator")
    return _load_generator(dotted_path)


@functools.lru_cache(maxsize=None)
def _load_generator(dotted_path):
    return import_string(dotted_path)()


@receiver(setting_changed)
def reset_id_generator(setting, **kwargs):
    if setting == "RESTAURANT_OPERATIONS":
        _load_generator.cache_clear()
