"""
Application settings.

Settings are read once from environment variables (after loading the `.env`
file next to this module) and handed to collaborators at construction time.
Business logic never reads the environment directly.

Environment variables:
- SUPABASE_URL / SUPABASE_KEY: Supabase project URL and server-side key
- VETRA_API_URL: base URL of the REST API used by HTTP sale sources
- VETRA_BRAND: name printed on reports and receipts
- VETRA_CURRENCY_SYMBOL: currency glyph prefixed to amounts
- VETRA_CURRENCY_CODE: ISO code used where the glyph cannot be rendered (PDF)
- VETRA_REPORT_TIMEZONE: IANA zone for converting stored timestamps to
  local wall-clock time (system local zone when unset)
- VETRA_REPORTS_DIR: directory saved reports are written to
- VETRA_HTTP_TIMEOUT: request timeout in seconds for HTTP sale sources
- LOG_LEVEL: root logging level
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:8000/api/v1"


@dataclass(frozen=True, slots=True)
class Settings:
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    brand: str = "Vetra POS"
    currency_symbol: str = "₱"
    currency_code: str = "PHP"
    report_timezone: Optional[str] = None
    reports_dir: Path = Path("reports")
    http_timeout: float = 10.0
    log_level: str = "INFO"

    @property
    def tz(self) -> Optional[tzinfo]:
        """Zone used for wall-clock conversion; None means the system local zone."""
        if not self.report_timezone:
            return None
        return ZoneInfo(self.report_timezone)

    @property
    def product_slug(self) -> str:
        """First word of the brand, lowercased (used in report filenames)."""
        words = self.brand.split()
        return words[0].lower() if words else "report"


def settings_from_mapping(env: Mapping[str, str]) -> Settings:
    """Build Settings from a mapping of environment variables."""

    timeout = env.get("VETRA_HTTP_TIMEOUT")
    return Settings(
        supabase_url=env.get("SUPABASE_URL") or None,
        supabase_key=env.get("SUPABASE_KEY") or None,
        api_url=(env.get("VETRA_API_URL") or DEFAULT_API_URL).rstrip("/"),
        brand=env.get("VETRA_BRAND") or "Vetra POS",
        currency_symbol=env.get("VETRA_CURRENCY_SYMBOL") or "₱",
        currency_code=(env.get("VETRA_CURRENCY_CODE") or "PHP").upper(),
        report_timezone=env.get("VETRA_REPORT_TIMEZONE") or None,
        reports_dir=Path(env.get("VETRA_REPORTS_DIR") or "reports"),
        http_timeout=float(timeout) if timeout else 10.0,
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load settings from `.env` and the process environment (cached)."""

    env_path = Path(__file__).parent / ".env"
    load_dotenv(dotenv_path=env_path)
    return settings_from_mapping(os.environ)


__all__ = ["Settings", "load_settings", "settings_from_mapping"]
