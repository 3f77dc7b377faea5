"""Per-user cache of the serialized ``GET /api/reviews`` payload."""

import structlog
from django.conf import settings
from django.core.cache import cache

from ..config import DUE_REVIEWS_CACHE_PREFIX

logger = structlog.get_logger()


def due_reviews_key(user_id):
    return f"{DUE_REVIEWS_CACHE_PREFIX}:{user_id}"


def get_cached_due_reviews(user_id):
    return cache.get(due_reviews_key(user_id))


def cache_due_reviews(user_id, payload):
    cache.set(due_reviews_key(user_id), payload, timeout=settings.REVIEWS_CACHE_TTL)


def invalidate_due_reviews(user_id):
    cache.delete(due_reviews_key(user_id))
    logger.info("due_reviews_cache_cleared", user_id=str(user_id))
