"""Observability: process-wide logging setup."""

from upgrade_lint.observability.logging_config import LogSettings, resolve_settings, setup_logging

__all__ = ["LogSettings", "resolve_settings", "setup_logging"]
