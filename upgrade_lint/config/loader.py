"""
Configuration loader: reads lint.yml into a run configuration.

A run configuration names which checks to select and which version
transition to evaluate. It reads YAML, validates against a Pydantic
schema, and turns the result into a run context and a target.

    selection:
      patterns: ["components.*", "workloads"]
      group: workload
    versions:
      current: "2.25.0"
      target: "3.0.0"
    timeout_seconds: 300
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from upgrade_lint.check.base import CheckGroup, Target
from upgrade_lint.check.context import CheckContext
from upgrade_lint.check.selector import SELECTOR_ALL
from upgrade_lint.client.reader import Reader
from upgrade_lint.util.version import Version, VersionError

logger = logging.getLogger(__name__)

# Default config filename
LINT_CONFIG_FILE = "lint.yml"


class ConfigError(Exception):
    """Raised when run configuration is invalid or missing."""


class SelectionConfig(BaseModel):
    """Which checks to run."""

    patterns: list[str] = Field(default_factory=lambda: [SELECTOR_ALL])
    group: CheckGroup | None = None

    @field_validator("patterns")
    @classmethod
    def _non_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one pattern is required")
        return v


class VersionsConfig(BaseModel):
    """Source and target platform versions (either may be omitted)."""

    current: str | None = None
    target: str | None = None

    @field_validator("current", "target")
    @classmethod
    def _semver(cls, v: str | None) -> str | None:
        if v:
            Version.parse(v)
        return v


class LintConfig(BaseModel):
    """A complete run configuration."""

    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    versions: VersionsConfig = Field(default_factory=VersionsConfig)
    timeout_seconds: float | None = Field(default=None, gt=0)

    @property
    def patterns(self) -> list[str]:
        return self.selection.patterns

    @property
    def group(self) -> CheckGroup | None:
        return self.selection.group

    @property
    def current_version(self) -> Version | None:
        v = self.versions.current
        return Version.parse(v) if v else None

    @property
    def target_version(self) -> Version | None:
        v = self.versions.target
        return Version.parse(v) if v else None

    def build_context(self) -> CheckContext:
        """A run context honoring ``timeout_seconds``."""
        if self.timeout_seconds is None:
            return CheckContext.background()
        return CheckContext.with_timeout(self.timeout_seconds)

    def build_target(self, reader: Reader) -> Target:
        """The target checks are evaluated against.

        Lint mode (no target version) evaluates the current version
        against itself.
        """
        current = self.current_version
        target = self.target_version or current
        return Target(client=reader, current_version=current, target_version=target)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for lint.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to lint.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / LINT_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> LintConfig:
    """Load and validate a run configuration.

    Args:
        path: Explicit path to lint.yml. If None, searches upward.

    Returns:
        Validated LintConfig.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(f"No {LINT_CONFIG_FILE} found.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading lint config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = LintConfig.model_validate(data)
    except (ValueError, VersionError) as e:
        raise ConfigError(f"Invalid lint configuration: {e}") from e

    logger.info(
        "Loaded lint config: patterns=%s group=%s",
        config.patterns, config.group or "-",
    )
    return config
