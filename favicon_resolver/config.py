"""Resolver configuration.

Fixed engine tables (allow-list, magic bytes, priority ranks) live next to
the code that uses them; this module holds the tunables and the
environment overrides for them.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from favicon_resolver.extractors.links import PriorityPolicy

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/61.0.3163.100 Safari/537.36"
)

MAX_REDIRECTS = 2


class ResolverConfig(BaseModel):
    """Tunables for one resolver instance."""

    max_redirects: int = MAX_REDIRECTS
    timeout: float = 10.0  # seconds, per request
    connect_timeout: float = 5.0
    user_agent: str = DEFAULT_USER_AGENT
    priority: PriorityPolicy = Field(default_factory=PriorityPolicy)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "ResolverConfig":
        """Build a config from FAVICON_* environment variables.

        Raises:
            ValueError: if a numeric variable is not a number
        """
        load_dotenv(env_file)

        overrides = {}
        if os.environ.get("FAVICON_TIMEOUT"):
            overrides["timeout"] = float(os.environ["FAVICON_TIMEOUT"])
        if os.environ.get("FAVICON_CONNECT_TIMEOUT"):
            overrides["connect_timeout"] = float(os.environ["FAVICON_CONNECT_TIMEOUT"])
        if os.environ.get("FAVICON_USER_AGENT"):
            overrides["user_agent"] = os.environ["FAVICON_USER_AGENT"]
        return cls(**overrides)


DEFAULT_CONFIG = ResolverConfig()
