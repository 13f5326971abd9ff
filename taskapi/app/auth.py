import logging
from typing import Optional

from fastapi import Security
from fastapi.security import APIKeyHeader

DEFAULT_HEADER_NAME = "X-API-Key"

logger = logging.getLogger(__name__)

# Documented in the OpenAPI schema but never enforced.
api_key_header = APIKeyHeader(
    name=DEFAULT_HEADER_NAME,
    scheme_name="api_key",
    description="Optional API key (accepted but not verified)",
    auto_error=False,
)


def optional_api_key(key: Optional[str] = Security(api_key_header)) -> Optional[str]:
    if key:
        logger.debug("api key supplied (not verified)")
    return key
