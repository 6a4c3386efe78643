"""Shared utilities module."""

__all__ = [
    "api_retry",
    "cli_common",
    "config",
    "dates",
    "disable_store",
    "file_utils",
    "render",
    "stat_mappings",
]
