"""
Configuration Management
========================

Centralized configuration for the agents, the market data tools, the Canva
designer and the design refresh scheduler.

Nothing here is strictly required: every upstream has a public default
endpoint and the optional credentials (Canva, GitHub) only unlock extra
functionality. A missing token degrades the matching tool to a
ToolResult error instead of stopping the process.

Values come from the environment, after loading a .env file with
python-dotenv.

Usage:
    from src.utils.config import get_config

    config = get_config()
    print(config.price.api_url)
    print(config.scheduler.cron)
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _optional(name: str, default: str) -> str:
    """
    Get an optional environment variable with a default.

    Args:
        name: The environment variable name
        default: Default value if not set

    Returns:
        The value or the default
    """
    return os.getenv(name) or default


def _optional_int(name: str, default: int) -> int:
    """
    Get an optional integer environment variable.

    Args:
        name: The environment variable name
        default: Default value if not set or invalid

    Returns:
        The integer value or the default
    """
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        print(f"Warning: {name} is not a valid integer, using default: {default}")
        return default


def _optional_float(name: str, default: float) -> float:
    """Get an optional float environment variable."""
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        print(f"Warning: {name} is not a valid number, using default: {default}")
        return default


def _optional_bool(name: str, default: bool) -> bool:
    """
    Get an optional boolean environment variable.

    Returns:
        True if value is 'true' (case-insensitive), False otherwise
    """
    value = os.getenv(name)
    if not value:
        return default
    return value.lower() == "true"


# ==============================================================================
# Configuration Dataclasses
# ==============================================================================

@dataclass(frozen=True)
class PriceConfig:
    """CoinGecko price feed configuration."""
    api_url: str   # CoinGecko v3 base URL
    currency: str  # Quote currency for btc_price()


@dataclass(frozen=True)
class MempoolConfig:
    """mempool.space fee estimator configuration."""
    api_url: str


@dataclass(frozen=True)
class NewsConfig:
    """RSS news feed configuration."""
    feed_url: str
    item_count: int


@dataclass(frozen=True)
class CanvaConfig:
    """Canva Connect API configuration (optional)."""
    access_token: str | None  # OAuth access token
    api_url: str


@dataclass(frozen=True)
class GitHubConfig:
    """GitHub API configuration used by DevRadar (token optional)."""
    token: str | None
    default_repo: str


@dataclass(frozen=True)
class SchedulerConfig:
    """Daily design refresh configuration."""
    enabled: bool
    cron: str                      # Five-field cron expression
    timezone: str
    price_change_percent: float    # Refresh when price moved this much
    fee_change_multiplier: float   # Refresh when fast fee moved by this factor
    backup_retention_days: int


@dataclass(frozen=True)
class Config:
    """
    Root configuration object.

    Access via:
        config = get_config()
        config.mempool.api_url
        config.exports_dir
    """
    price: PriceConfig
    mempool: MempoolConfig
    news: NewsConfig
    canva: CanvaConfig
    github: GitHubConfig
    scheduler: SchedulerConfig
    exports_dir: Path
    http_timeout_seconds: float
    log_level: str


def load_config() -> Config:
    """
    Load all configuration from the environment.

    Loads .env first, then applies defaults for everything that is unset.

    Returns:
        Config: The typed configuration
    """
    load_dotenv()

    # Exports live next to src/ unless EXPORTS_DIR is absolute
    project_root = Path(__file__).parent.parent.parent

    return Config(
        price=PriceConfig(
            api_url=_optional("COINGECKO_API_URL", "https://api.coingecko.com/api/v3"),
            currency=_optional("PRICE_CURRENCY", "usd"),
        ),
        mempool=MempoolConfig(
            api_url=_optional("MEMPOOL_API_URL", "https://mempool.space/api"),
        ),
        news=NewsConfig(
            feed_url=_optional("BITCOIN_NEWS_FEED_URL", "https://bitcoinmagazine.com/.rss/full/"),
            item_count=_optional_int("NEWS_ITEM_COUNT", 3),
        ),
        canva=CanvaConfig(
            access_token=os.getenv("CANVA_ACCESS_TOKEN"),
            api_url=_optional("CANVA_API_URL", "https://api.canva.com/rest/v1"),
        ),
        github=GitHubConfig(
            token=os.getenv("GITHUB_TOKEN"),
            default_repo=_optional("DEVRADAR_DEFAULT_REPO", "bitcoin/bitcoin"),
        ),
        scheduler=SchedulerConfig(
            enabled=_optional_bool("DESIGN_REFRESH_ENABLED", True),
            cron=_optional("DESIGN_REFRESH_CRON", "0 8 * * *"),
            timezone=_optional("DESIGN_REFRESH_TIMEZONE", "America/New_York"),
            price_change_percent=_optional_float("PRICE_CHANGE_THRESHOLD_PERCENT", 5.0),
            fee_change_multiplier=_optional_float("FEE_CHANGE_MULTIPLIER", 2.0),
            backup_retention_days=_optional_int("BACKUP_RETENTION_DAYS", 30),
        ),
        exports_dir=project_root / _optional("EXPORTS_DIR", "exports"),
        http_timeout_seconds=_optional_float("HTTP_TIMEOUT_SECONDS", 10.0),
        log_level=_optional("LOG_LEVEL", "info"),
    )


# ==============================================================================
# Singleton Pattern
# ==============================================================================

_config_instance: Config | None = None


def get_config() -> Config:
    """
    Get the singleton configuration instance.

    The configuration is loaded on first access and cached afterwards.

    Returns:
        Config: The application configuration
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = load_config()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next access reloads it."""
    global _config_instance
    _config_instance = None


# ==============================================================================
# Helper Functions
# ==============================================================================

def is_canva_configured() -> bool:
    """Check if a Canva access token is available."""
    return get_config().canva.access_token is not None


def is_github_configured() -> bool:
    """Check if GitHub requests will be authenticated."""
    return get_config().github.token is not None
