"""
Service configuration read from the environment.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

OMDB_BASE_URL = "https://www.omdbapi.com/"
CHAT_COMPLETIONS_URL = "https://router.huggingface.co/v1/chat/completions"
DEFAULT_CHAT_MODEL = "openai/gpt-oss-20b:groq"
PLACEHOLDER_POSTER = "/no-poster.png"

# values shipped in example env files, never real keys
_PLACEHOLDER_KEYS = {"your_omdb_api_key_here", "YOUR_OMDB_API_KEY"}

HOUR = 60 * 60


@dataclass(frozen=True)
class CacheTTLs:
    movie_details: int = 24 * HOUR
    recommendations: int = 12 * HOUR
    search: int = 6 * HOUR
    similar: int = 12 * HOUR
    trending: int = 6 * HOUR


@dataclass(frozen=True)
class Settings:
    omdb_api_key: Optional[str] = None
    omdb_base_url: str = OMDB_BASE_URL
    chat_token: Optional[str] = None
    chat_model: str = DEFAULT_CHAT_MODEL
    chat_url: str = CHAT_COMPLETIONS_URL
    upstream_timeout: float = 8.0
    chat_timeout: float = 30.0
    app_env: str = "production"
    placeholder_poster: str = PLACEHOLDER_POSTER
    cache_ttls: CacheTTLs = field(default_factory=CacheTTLs)

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"

    @classmethod
    def from_env(cls) -> "Settings":
        api_key = os.environ.get("OMDB_API_KEY") or None
        if api_key in _PLACEHOLDER_KEYS:
            api_key = None
        return cls(
            omdb_api_key=api_key,
            omdb_base_url=os.environ.get("OMDB_BASE_URL") or OMDB_BASE_URL,
            chat_token=os.environ.get("HF_TOKEN") or None,
            chat_model=os.environ.get("HF_MODEL_NAME") or DEFAULT_CHAT_MODEL,
            chat_url=os.environ.get("CHAT_COMPLETIONS_URL") or CHAT_COMPLETIONS_URL,
            upstream_timeout=float(os.environ.get("UPSTREAM_TIMEOUT") or 8.0),
            chat_timeout=float(os.environ.get("CHAT_TIMEOUT") or 30.0),
            app_env=os.environ.get("APP_ENV") or "production",
            placeholder_poster=os.environ.get("PLACEHOLDER_POSTER") or PLACEHOLDER_POSTER,
        )
