import hmac
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

logger = logging.getLogger(__name__)

API_KEY_SCHEME = "ApiKey"

api_key_header = APIKeyHeader(name="Authorization", auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Identity attached to a request that presented the shared key."""

    name: str
    role: str


def _keys_match(presented: str, expected: str) -> bool:
    # Header values arrive as UTF-8 bytes decoded with latin-1
    return hmac.compare_digest(presented.encode("latin-1", "replace"), expected.encode("utf-8"))


def get_principal(request: Request, api_key: Optional[str] = Security(api_key_header)) -> Principal:
    """Dependency that checks the Authorization header against the shared key.

    On success the principal is also stored as ``request.state.principal``.
    """
    settings = request.app.state.settings
    if api_key is None or not _keys_match(api_key, settings.api_key):
        logger.info("Rejected request to %s: invalid API key", request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API KEY",
            headers={"WWW-Authenticate": API_KEY_SCHEME},
        )
    principal = Principal(name=settings.auth_claim_name, role=settings.auth_claim_role)
    request.state.principal = principal
    return principal
