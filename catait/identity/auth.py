"""
===============================================================================
CRC CARD: identity/auth.py
===============================================================================

Module:
    API key authentication (X-API-Key)

Responsibilities:
    - Load/parse the API key configuration from Settings (env).
    - Validate API keys with constant-time comparison.
    - Validate scopes (cards:admin, users:admin, metrics) for endpoints.
    - Expose FastAPI dependencies (require_scope, require_metrics_auth).
    - Never log a key in clear; only a truncated hash.

Collaborators:
    - crosscutting.config.get_settings: API_KEYS_CONFIG + metrics settings.
    - crosscutting.error_responses: standard unauthorized/forbidden.
    - crosscutting.logger: structured logging.

Notes:
    - No keys configured means auth is disabled (local development).
      Production refuses to start without keys (see Settings).
===============================================================================
"""

from __future__ import annotations

import hashlib
import hmac
import json
from functools import lru_cache
from typing import Callable

from fastapi import Header, Request

from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger

SCOPE_CARDS_ADMIN = "cards:admin"
SCOPE_METRICS = "metrics"
SCOPE_USERS_ADMIN = "users:admin"

# R: Length of the truncated hash used in logs.
_KEY_HASH_LEN: int = 12


def _hash_key(key: str) -> str:
    """Hash the API key for safe logging."""
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
    return digest[:_KEY_HASH_LEN]


def _constant_time_compare(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def _normalize_key(key: str | None) -> str | None:
    if key is None:
        return None
    key = key.strip()
    return key or None


def _validate_config_shape(raw: object) -> dict[str, list[str]]:
    """Validate/normalize the API keys JSON.

    Expected format:
        {
          "admin-key": ["cards:admin", "metrics"],
          "ops-key": ["*"]   # wildcard
        }
    """
    if not isinstance(raw, dict):
        return {}

    cfg: dict[str, list[str]] = {}
    for k, v in raw.items():
        if not isinstance(k, str) or not k.strip():
            continue
        if not isinstance(v, list) or not all(isinstance(s, str) for s in v):
            continue
        scopes = [s.strip() for s in v if s.strip()]
        if scopes:
            cfg[k.strip()] = scopes
    return cfg


@lru_cache(maxsize=1)
def _parse_keys_config() -> dict[str, list[str]]:
    """Parse API_KEYS_CONFIG; empty dict when unset or invalid."""
    from ..crosscutting.config import get_settings

    config_str = (get_settings().api_keys_config or "").strip()
    if not config_str:
        return {}

    try:
        raw = json.loads(config_str)
    except json.JSONDecodeError as exc:
        logger.warning("invalid API_KEYS_CONFIG (JSON)", extra={"error": str(exc)})
        return {}

    cfg = _validate_config_shape(raw)
    if not cfg:
        logger.warning("invalid API_KEYS_CONFIG (shape)")
    return cfg


def get_keys_config() -> dict[str, list[str]]:
    return _parse_keys_config()


def clear_keys_cache() -> None:
    """Clear cached config (tests / local hot reload)."""
    _parse_keys_config.cache_clear()


def is_auth_enabled() -> bool:
    return bool(get_keys_config())


class APIKeyValidator:
    """Pure validator for API keys and scopes."""

    def __init__(self, keys_config: dict[str, list[str]]):
        self._keys = keys_config

    def validate_key(self, key: str) -> bool:
        if not key:
            return False

        # R: Compare against every key so timing does not leak via early return.
        found = False
        for valid_key in self._keys.keys():
            if _constant_time_compare(key, valid_key):
                found = True
        return found

    def get_scopes(self, key: str) -> list[str]:
        for valid_key, scopes in self._keys.items():
            if _constant_time_compare(key, valid_key):
                return scopes
        return []

    def validate_scope(self, key: str, required_scope: str) -> bool:
        scopes = self.get_scopes(key)
        return required_scope in scopes or "*" in scopes


async def check_scope(request: Request, api_key: str | None, scope: str) -> None:
    """
    Enforce a valid key with `scope`.

    - Auth disabled (no keys configured): no-op.
    - Missing key: 401.
    - Unknown key or missing scope: 403.
    """
    keys_cfg = get_keys_config()
    if not keys_cfg:
        return None

    api_key_norm = _normalize_key(api_key)
    if not api_key_norm:
        logger.warning(
            "auth failed: missing X-API-Key",
            extra={"path": request.url.path, "scope": scope},
        )
        raise unauthorized("Missing API key. Send the X-API-Key header.")

    validator = APIKeyValidator(keys_cfg)

    if not validator.validate_key(api_key_norm):
        logger.warning(
            "auth failed: invalid API key",
            extra={"key_hash": _hash_key(api_key_norm), "path": request.url.path},
        )
        raise forbidden("Invalid API key.")

    if not validator.validate_scope(api_key_norm, scope):
        logger.warning(
            "auth failed: insufficient scope",
            extra={
                "key_hash": _hash_key(api_key_norm),
                "path": request.url.path,
                "required_scope": scope,
            },
        )
        raise forbidden(f"API key lacks the required scope: {scope}")

    request.state.api_key_hash = _hash_key(api_key_norm)
    return None


def require_scope(scope: str) -> Callable:
    """FastAPI dependency: valid API key + scope."""

    async def dependency(
        request: Request,
        api_key: str | None = Header(None, alias="X-API-Key"),
    ) -> None:
        await check_scope(request, api_key, scope)

    return dependency


def require_metrics_auth() -> Callable:
    """FastAPI dependency: /metrics auth, controlled by settings."""

    async def dependency(
        request: Request,
        api_key: str | None = Header(None, alias="X-API-Key"),
    ) -> None:
        from ..crosscutting.config import get_settings

        if not get_settings().metrics_require_auth:
            return None

        await check_scope(request, api_key, SCOPE_METRICS)

    return dependency
