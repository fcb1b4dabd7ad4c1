"""
Cached public pages for published issues.

Public read endpoints store their payload under a key derived from the page
path; publication changes drop every page that shows the affected issue.
"""
import logging

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)


def cache_key(path):
    return f"{settings.WORKFLOW['PUBLIC_PAGE_CACHE_PREFIX']}:{path}"


def public_paths(issue):
    """Pages whose content depends on ``issue``."""
    slug = issue.journal.slug
    return [
        '/issues',
        f'/issues/{issue.id}',
        '/journals',
        f'/journals/{slug}',
        f'/journals/{slug}/current',
        f'/journals/{slug}/archives',
    ]


def cached_page(path, build):
    """Return the cached payload for ``path``, building and storing it on a miss."""
    key = cache_key(path)
    payload = cache.get(key)
    if payload is None:
        payload = build()
        cache.set(key, payload, settings.WORKFLOW['PUBLIC_PAGE_CACHE_TIMEOUT'])
    return payload


def invalidate_public_pages(issue):
    """Drop cached pages showing ``issue``. Cache errors are logged, never raised."""
    paths = public_paths(issue)
    try:
        cache.delete_many([cache_key(path) for path in paths])
    except Exception as e:
        logger.error(f"Failed to invalidate public pages for issue {issue.id}: {e}")
        return
    logger.info(f"Invalidated {len(paths)} public pages for issue {issue.id}")
