"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# Values are read from, in priority order:
#
#   1. **Environment variables** - e.g. SOURCE_URL=https://...
#   2. **.env file** - key=value lines in the project root .env file
#   3. The defaults declared below
#
# Field ``output_dir`` maps to env var ``OUTPUT_DIR`` and so on.
# CLI flags override all of these for a single run.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.errors import ConfigurationError
from src.utils.logging import normalize_log_level

DEFAULT_SOURCE_URL = "https://wiki.kurobbs.com/mc/item/1220879855033786368"


class Settings(BaseSettings):
    """Catalog sync settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Source ===
    source_url: str = DEFAULT_SOURCE_URL
    user_agent: str = "Mozilla/5.0 (compatible; achievement-sync/1.0)"
    accept_language: str = "en-US,en;q=0.9,zh-CN;q=0.8"
    request_timeout: float = 20.0

    # === Output ===
    output_dir: str = "public/data"
    index_path: str = ""  # Empty = <output_dir>/index.json

    # === Catalog ===
    default_category: str = "Official Wiki"
    cjk_identifiers: bool = True  # Keep CJK ideographs in ids instead of slugging them away

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR or CRITICAL

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        try:
            return normalize_log_level(value)
        except ConfigurationError as exc:
            raise ValueError(exc.message) from exc

    def resolved_index_path(self) -> Path:
        """Return the index path, defaulting to ``<output_dir>/index.json``."""
        if self.index_path:
            return Path(self.index_path)
        return Path(self.output_dir) / "index.json"
