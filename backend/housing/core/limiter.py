"""Rate limiting configuration."""

from __future__ import annotations

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address

from housing.core.config import settings

logger = logging.getLogger(__name__)

# In-process storage; a shared Redis storage only matters with several
# API workers behind one address.
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
    enabled=settings.RATE_LIMIT_ENABLED,
)

logger.info(
    f"Rate limiter {'enabled' if settings.RATE_LIMIT_ENABLED else 'disabled'} "
    f"(login limit {settings.LOGIN_RATE_LIMIT})"
)
