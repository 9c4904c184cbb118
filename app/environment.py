# app/environment.py
"""
Picks the DEV or PROD backend profile from the host name we are running on.
Matching is a case-insensitive substring test against two allowlists;
anything unrecognised falls back to DEV.
"""

import socket
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional

from app.config import settings, Settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

DEV = "DEV"
PROD = "PROD"


@dataclass(frozen=True)
class EnvironmentProfile:
    env: str            # DEV | PROD
    endpoint_url: str
    api_key: str


def _matches(hostname: str, patterns: Iterable[str]) -> bool:
    return any(p.lower() in hostname for p in patterns)


def detect_environment(hostname: str, cfg: Settings = settings) -> str:
    host = (hostname or "").lower()
    if _matches(host, cfg.DEV_HOST_PATTERNS):
        return DEV
    if _matches(host, cfg.PROD_HOST_PATTERNS):
        return PROD
    return DEV


def resolve_environment(hostname: str, cfg: Settings = settings) -> EnvironmentProfile:
    """Pure lookup: host name in, profile out."""
    env = detect_environment(hostname, cfg)
    if env == PROD:
        return EnvironmentProfile(env=PROD, endpoint_url=cfg.PROD_BACKEND_URL, api_key=cfg.PROD_BACKEND_KEY)
    return EnvironmentProfile(env=DEV, endpoint_url=cfg.DEV_BACKEND_URL, api_key=cfg.DEV_BACKEND_KEY)


@lru_cache(maxsize=1)
def current_environment(hostname: Optional[str] = None) -> EnvironmentProfile:
    """Resolved once per process and reused read-only afterwards."""
    host = hostname or settings.APP_HOSTNAME or socket.gethostname()
    profile = resolve_environment(host)
    logger.info(f"Environment: {profile.env} (host={host})")
    return profile
