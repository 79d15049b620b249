import json
import hashlib
from typing import Any, Dict, Optional

from flashcard_ai.config import settings
from flashcard_ai.utils import get_logger

LOG = get_logger()


class CacheManager:
    """Redis-backed cache for card summaries.

    Disabled caches (by config or because Redis is unreachable) behave as a
    permanent miss; cache failures never fail the caller.
    """

    def __init__(self, enabled: Optional[bool] = None, ttl: Optional[int] = None, client: Any = None):
        self.enabled = settings.REDIS_CACHE_ENABLED if enabled is None else enabled
        self.ttl = ttl or settings.REDIS_CACHE_TTL
        self._client = client
        if not self.enabled:
            LOG.info('redis_cache_disabled')
            return
        if self._client is None:
            import redis
            self._client = redis.Redis(host=settings.REDIS_HOST, port=settings.REDIS_PORT, password=settings.REDIS_PASSWORD or None, decode_responses=True)
        try:
            self._client.ping()
            LOG.info('redis_cache_connected', extra={'host': settings.REDIS_HOST, 'port': settings.REDIS_PORT})
        except Exception as e:
            LOG.warning('redis_cache_unavailable', extra={'error': str(e)})
            self.enabled = False

    def _key(self, question: str, answer: str) -> str:
        j = json.dumps({'question': question, 'answer': answer}, sort_keys=True)
        h = hashlib.sha256(j.encode()).hexdigest()[:16]
        return f"card_summary:{h}"

    def get_summary(self, question: str, answer: str) -> Optional[Dict[str, Any]]:
        if not self.enabled or not self._client:
            return None
        key = self._key(question, answer)
        try:
            val = self._client.get(key)
            if val is None:
                LOG.info('cache_miss', extra={'key': key})
                return None
            LOG.info('cache_hit', extra={'key': key})
            return json.loads(val)
        except Exception as e:
            LOG.warning('cache_get_failed', extra={'error': str(e)})
            return None

    def set_summary(self, question: str, answer: str, summary: Dict[str, Any], ttl: Optional[int] = None):
        if not self.enabled or not self._client:
            return
        key = self._key(question, answer)
        ttl = ttl or self.ttl
        try:
            self._client.setex(key, ttl, json.dumps(summary))
            LOG.info('cache_set', extra={'key': key, 'ttl': ttl})
        except Exception as e:
            LOG.warning('cache_set_failed', extra={'error': str(e)})

    def invalidate_summary(self, question: str, answer: str):
        if not self.enabled or not self._client:
            return
        key = self._key(question, answer)
        try:
            self._client.delete(key)
            LOG.info('cache_invalidate', extra={'key': key})
        except Exception as e:
            LOG.warning('cache_invalidate_failed', extra={'error': str(e)})
