"""
Configuration management for the person CLI client.

Resolves the service URL from command-line flags, environment
variables and an optional TOML config file, in that order.
"""

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_URL = "http://127.0.0.1:8080"


class Config:
    """Configuration manager for the person CLI client."""

    def __init__(self, url: Optional[str] = None, timeout: int = 30):
        """Initialize configuration with optional overrides."""
        self.url = url or self._get_url()
        self.timeout = timeout

    def _get_url(self) -> str:
        """Get base URL from environment or config file."""
        if url := os.getenv("PERSON_API_URL"):
            return url

        config_data = self._load_config_file()
        if config_data and "url" in config_data:
            return config_data["url"]

        return DEFAULT_URL

    def _load_config_file(self) -> Optional[Dict[str, Any]]:
        """Load configuration from TOML file."""
        config_dir = os.getenv("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
        config_path = Path(config_dir) / "person-cli" / "config.toml"

        if not config_path.exists():
            return None

        with open(config_path, "rb") as f:
            return tomllib.load(f)
