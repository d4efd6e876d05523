"""
Configuration for the configuration key extractor.

Settings can be built in code or loaded from a YAML file:

    workers: 4
    verbose: false
    debug_resolvers: true
    debug_filter: app.timeout
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from element_model import ConfigDocError

logger = logging.getLogger(__name__)


class ConfigLoadError(ConfigDocError):
    """Raised when the extractor configuration cannot be loaded or is invalid."""
    pass


@dataclass
class ExtractorConfig:
    """Settings of one extraction run.

    Attributes:
        workers: Threads used to walk top-level types (1 = sequential)
        verbose: Enable DEBUG logging
        debug_resolvers: Dump the draft record around every resolver
        debug_filter: Only dump drafts whose key contains this text
    """
    workers: int = 1
    verbose: bool = False
    debug_resolvers: bool = False
    debug_filter: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ConfigLoadError(f"workers must be a positive integer, got {self.workers!r}")

    @classmethod
    def from_yaml(cls, yaml_path) -> "ExtractorConfig":
        """Load configuration from a YAML file. An empty file yields the defaults."""
        yaml_path = Path(yaml_path)
        try:
            with open(yaml_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(f"Failed to load configuration file {yaml_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigLoadError(
                f"Configuration file {yaml_path} must contain a mapping, got {type(data).__name__}"
            )

        logger.debug(f"Loaded configuration from {yaml_path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractorConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigLoadError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def configure_logging(config):
    """
    Set up root logging: DEBUG when verbose, otherwise WARNING only.

    basicConfig() is a no-op once the root logger has handlers, so the root
    level is also set explicitly.
    """
    level = "DEBUG" if config.verbose else "WARNING"
    logging.basicConfig(level=level)
    logging.getLogger().setLevel(level)
