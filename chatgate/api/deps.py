"""
API dependencies: configuration and the shared-secret gate.

Every route depends on require_secret; a missing or wrong `secret` query
parameter is answered with a 302 to the configured redirect URL.
"""

import hmac
import logging

from fastapi import Depends, HTTPException, Query

from chatgate.core.config import GatewayConfig

logger = logging.getLogger(__name__)


def get_config() -> GatewayConfig:
    return GatewayConfig.from_env()


def require_secret(
    secret: str | None = Query(None),
    config: GatewayConfig = Depends(get_config),
) -> GatewayConfig:
    """Pass the config through when the secret matches, else redirect."""
    if not secret or not config.auth_secret or not hmac.compare_digest(
        secret.encode("utf-8"), config.auth_secret.encode("utf-8")
    ):
        logger.info("[auth] secret missing or wrong; redirecting")
        raise HTTPException(status_code=302, headers={"Location": config.redirect_url})
    return config
