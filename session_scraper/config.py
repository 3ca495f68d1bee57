"""Configuration management for the session scraper."""

import os
from enum import Enum
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_AGENT_NAME = "SessionScraper/1.0"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_path(name: str) -> Optional[Path]:
    value = os.getenv(name, "")
    return Path(value) if value else None


class ReloginFailurePolicy(str, Enum):
    """What a fetch does when the relogin it triggered fails."""

    WARN = "warn"
    RAISE = "raise"


@dataclass
class TargetConfig:
    """Target server configuration."""

    host: str = os.getenv("SCRAPER_HOST", "")
    agent_name: str = os.getenv("SCRAPER_AGENT_NAME", "")
    session_cookie_name: str = os.getenv("SCRAPER_SESSION_COOKIE", "")
    login_path: str = os.getenv("SCRAPER_LOGIN_PATH", "")


@dataclass
class SessionConfig:
    """Session keep-alive configuration."""

    connections_per_login: int = int(os.getenv("SCRAPER_CONNECTIONS_PER_LOGIN", "0"))
    relogin_failure: ReloginFailurePolicy = ReloginFailurePolicy(
        os.getenv("SCRAPER_RELOGIN_FAILURE", "warn").lower()
    )
    reset_count_on_login: bool = _env_flag("SCRAPER_RESET_COUNT_ON_LOGIN")
    request_timeout: float = float(os.getenv("SCRAPER_REQUEST_TIMEOUT", "30"))


@dataclass
class ScraperConfig:
    """Main scraper configuration."""

    target: TargetConfig = field(default_factory=TargetConfig)
    session: SessionConfig = field(default_factory=SessionConfig)

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[Path] = _env_path("SCRAPER_LOG_FILE")
    log_stream: str = os.getenv("SCRAPER_LOG_STREAM", "stderr")
    log_format: Optional[str] = os.getenv("SCRAPER_LOG_FORMAT") or None


# Global config instance
config = ScraperConfig()
