"""Upgrade Lint: upgrade readiness diagnostics for managed clusters."""

__version__ = "0.1.0"
