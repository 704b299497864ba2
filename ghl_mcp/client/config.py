"""Configuration for the GoHighLevel HTTP client and MCP hosts."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_BASE_URL = "https://services.leadconnectorhq.com"
DEFAULT_API_VERSION = "2021-07-28"

MODES: frozenset[str] = frozenset({"dynamic", "proxy"})


@dataclass(frozen=True)
class Settings:
    """Immutable settings loaded from environment variables."""

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    location_id: str = ""
    timeout: int = 30
    log_level: str = "WARNING"
    mode: str = "dynamic"

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"Invalid MCP_MODE {self.mode!r}; expected one of {sorted(MODES)}")

    @classmethod
    def from_env(cls, default_mode: str = "dynamic") -> Settings:
        api_key = os.getenv("GHL_API_KEY", "")
        base_url = os.getenv("GHL_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
        api_version = os.getenv("GHL_API_VERSION", DEFAULT_API_VERSION)
        location_id = os.getenv("GHL_LOCATION_ID", "")
        timeout = int(os.getenv("GHL_TIMEOUT", "30"))
        log_level = os.getenv("GHL_LOG_LEVEL", "WARNING").upper()
        mode = os.getenv("MCP_MODE", default_mode).strip().lower()
        return cls(
            api_key=api_key,
            base_url=base_url,
            api_version=api_version,
            location_id=location_id,
            timeout=timeout,
            log_level=log_level,
            mode=mode,
        )

    @property
    def proxy_mode(self) -> bool:
        return self.mode == "proxy"

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Version": self.api_version,
        }
        if self.api_key:
            h["Authorization"] = f"Bearer {self.api_key}"
        return h
