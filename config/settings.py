"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ValueError if WINGIT_PERSONAL_JSON is missing
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── Personal history + recent snapshot ──────────────────────────────────
    personal_json: str = field(
        default_factory=lambda: os.environ.get("WINGIT_PERSONAL_JSON", "")
    )
    recent_json: str = field(
        default_factory=lambda: os.environ.get("WINGIT_RECENT_JSON", "")
    )
    #: When set, a failing recent-observation source fails the request
    #: instead of degrading to an empty feed.
    strict_recent: bool = field(
        default_factory=lambda: os.environ.get("WINGIT_STRICT_RECENT", "0") == "1"
    )

    # ── eBird API ───────────────────────────────────────────────────────────
    ebird_api_token: str = field(
        default_factory=lambda: os.environ.get("EBIRD_API_TOKEN", "")
    )
    ebird_base_url: str = field(
        default_factory=lambda: os.environ.get("EBIRD_BASE_URL", "https://api.ebird.org")
    )
    ebird_timeout: float = field(
        default_factory=lambda: float(os.environ.get("EBIRD_TIMEOUT", "15"))
    )
    ebird_max_results: int = field(
        default_factory=lambda: int(os.environ.get("EBIRD_MAX_RESULTS", "0"))
    )

    # ── API Keys ────────────────────────────────────────────────────────────
    anthropic_api_key: str = field(
        default_factory=lambda: os.environ.get("ANTHROPIC_API_KEY", "")
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "5001"))
    )

    # ── AI Models ───────────────────────────────────────────────────────────
    #: Model used to turn a target list into a printable field checklist.
    field_checklist_model: str = "claude-haiku-4-5"

    def validate(self) -> None:
        """Raise ``ValueError`` if any required setting is missing."""
        if not self.personal_json.strip():
            raise ValueError(
                "WINGIT_PERSONAL_JSON environment variable is not set. "
                "Point it at your exported personal eBird checklist JSON."
            )
