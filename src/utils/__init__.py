"""
Utilities Module
================

Common utilities shared across the application:
- logger: Structured logging with levels and context
- config: Centralized configuration management
- cache: TTL key-value store with in-flight deduplication
"""

from src.utils.logger import Logger, logger
from src.utils.config import get_config, Config
from src.utils.cache import TTLCache, cache_store

__all__ = ["Logger", "logger", "get_config", "Config", "TTLCache", "cache_store"]
