"""Utility modules for the niche competitor finder."""

from .config import Settings, get_settings
from .domain_filter import (
    EXCLUDED_RETAILERS,
    clean_domain,
    is_excluded_domain,
    filter_excluded_domains,
)

__all__ = [
    "Settings",
    "get_settings",
    # Domain handling
    "EXCLUDED_RETAILERS",
    "clean_domain",
    "is_excluded_domain",
    "filter_excluded_domains",
]
