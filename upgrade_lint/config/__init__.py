"""Config: YAML run configuration."""

from upgrade_lint.config.loader import (
    LINT_CONFIG_FILE,
    ConfigError,
    LintConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "LINT_CONFIG_FILE",
    "ConfigError",
    "LintConfig",
    "find_config_file",
    "load_config",
]
