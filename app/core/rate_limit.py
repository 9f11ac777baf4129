from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

# Keyed by client address; in-memory storage is enough for a single process.
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
)
