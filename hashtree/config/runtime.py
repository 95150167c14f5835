"""
Runtime Configuration

Central configuration for hashing and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from hashtree.crypto.hashing import CONCAT_DECIMAL, Hasher
from hashtree.schemas.errors import ConfigException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "HASHTREE_"


@dataclass
class TreeConfig:
    """
    Complete runtime configuration for hash trees.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction

    concat_encoding defaults to "decimal" so roots stay comparable with
    trees built before the "binary" encoding existed.
    """
    hash_algorithm: str = "sha256"
    concat_encoding: str = CONCAT_DECIMAL
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - HASHTREE_HASH_ALGORITHM: hashlib algorithm (sha256, blake2b, ...)
        - HASHTREE_CONCAT_ENCODING: decimal or binary
        - HASHTREE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR
        - HASHTREE_LOG_FILE: optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM", "").lower()
        if os.getenv(f"{ENV_PREFIX}CONCAT_ENCODING"):
            overrides["concat_encoding"] = os.getenv(f"{ENV_PREFIX}CONCAT_ENCODING", "").lower()
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "").upper()
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "TreeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TreeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise ConfigException(f"Config file not found: {path}", path=str(path))

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigException(f"Invalid YAML in {path}: {e}", path=str(path)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigException(
                f"Config file must contain a mapping, got {type(data).__name__}",
                path=str(path),
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        defaults = cls()
        return cls(
            hash_algorithm=data.get("hash_algorithm", defaults.hash_algorithm),
            concat_encoding=data.get("concat_encoding", defaults.concat_encoding),
            log_level=data.get("log_level", defaults.log_level),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "TreeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        return new_config

    def make_hasher(self) -> Hasher:
        """
        Build the Hasher this configuration describes.

        Raises:
            UnsupportedHashException: If the algorithm or encoding is unknown
        """
        return Hasher(algorithm=self.hash_algorithm, concat_encoding=self.concat_encoding)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash_algorithm": self.hash_algorithm,
            "concat_encoding": self.concat_encoding,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[TreeConfig] = None


def get_default_config() -> TreeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = TreeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[TreeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
