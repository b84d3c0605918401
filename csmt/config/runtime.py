"""
Runtime Configuration

Central configuration for tree behaviour and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "CSMT_"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class TreeConfig:
    """Configuration for a tree instance."""
    debug: bool = False
    # Roll back the whole batch when one entry of insert() fails
    atomic_inserts: bool = False


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (CSMT_* prefix, .env supported)
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - CSMT_DEBUG: Log a node dump after each batch insert (true/false)
        - CSMT_ATOMIC_INSERTS: All-or-nothing batch inserts (true/false)
        - CSMT_LOG_LEVEL: Log level name
        - CSMT_LOG_FILE: Additional log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}DEBUG"):
            overrides.setdefault("tree", {})["debug"] = _env_flag(f"{ENV_PREFIX}DEBUG")
        if os.getenv(f"{ENV_PREFIX}ATOMIC_INSERTS"):
            overrides.setdefault("tree", {})["atomic_inserts"] = _env_flag(
                f"{ENV_PREFIX}ATOMIC_INSERTS"
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree", {})
        logging_data = data.get("logging", {})

        tree = TreeConfig(**tree_data) if tree_data else TreeConfig()
        log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(tree=tree, logging=log)

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.get("tree", {}).items():
            setattr(new_config.tree, key, value)
        for key, value in overrides.get("logging", {}).items():
            setattr(new_config.logging, key, value)
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "debug": self.tree.debug,
                "atomic_inserts": self.tree.atomic_inserts,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
        }

