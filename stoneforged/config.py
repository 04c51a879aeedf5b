"""Configuration settings for StoneForged-Intel."""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./stoneforged.db"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000

# Path of the YAML config file, for processes started without --config
CONFIG_PATH_ENV = "STONEFORGED_CONFIG"


@dataclass
class Settings:
    """Unified settings with YAML override support."""

    # Persistence
    database_url: str = field(
        default_factory=lambda: os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)
    )

    # Server
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    allowed_origins: str = field(default_factory=lambda: os.environ.get("ALLOWED_ORIGINS", "*"))

    # Client side (CLI and dashboard session)
    api_url: str = field(
        default_factory=lambda: os.environ.get(
            "STONEFORGED_API_URL", f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"
        )
    )
    request_timeout: float = 10.0  # seconds

    @property
    def origins(self) -> list[str]:
        """CORS origins as a list."""
        if self.allowed_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


def load_config(path: Optional[str] = None) -> Settings:
    """
    Load settings from YAML file with environment overrides.

    Priority: environment > config file > defaults

    Args:
        path: Path to YAML config file (optional; defaults to the
            STONEFORGED_CONFIG environment variable)

    Returns:
        Settings instance with merged configuration
    """
    settings = Settings()

    path = path or os.environ.get(CONFIG_PATH_ENV)
    if path:
        config_path = Path(path)
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}

            # Apply config values
            known = {f.name for f in fields(settings)}
            for key, value in data.items():
                if key in known:
                    setattr(settings, key, value)

    # Environment overrides (always win)
    if os.environ.get("DATABASE_URL"):
        settings.database_url = os.environ["DATABASE_URL"]
    if os.environ.get("STONEFORGED_API_URL"):
        settings.api_url = os.environ["STONEFORGED_API_URL"]
    if os.environ.get("ALLOWED_ORIGINS"):
        settings.allowed_origins = os.environ["ALLOWED_ORIGINS"]
    if os.environ.get("STONEFORGED_TIMEOUT"):
        settings.request_timeout = float(os.environ["STONEFORGED_TIMEOUT"])

    return settings
