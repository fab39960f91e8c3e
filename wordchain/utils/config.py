"""
Configuration loading for wordchain.

Settings live in YAML files under ``<project root>/configs``. An
environment-specific file (``chain_<environment>.yaml``) takes precedence over
the shared ``chain.yaml``; values missing from the file keep their defaults.
"""

from dataclasses import dataclass, fields
from typing import Optional
import logging
import os

import numpy as np
import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ChainConfig:
    """
    Knobs for building and driving a chain.

    Attributes:
        seed (int, optional): Seed for the random source; None for OS entropy.
        lowercase (bool): Lowercase tokens when tokenizing text.
        generate_length (int): Default number of words to generate.
        log_level (str): Console log level name.
        log_file (str, optional): JSON log file path; None disables file logging.
    """
    seed: Optional[int] = None
    lowercase: bool = True
    generate_length: int = 10
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")
        if int(self.generate_length) < 0:
            raise ValueError("generate_length must be non-negative")
        self.generate_length = int(self.generate_length)

    def make_rng(self):
        """Build the random source the chain samples with."""
        return np.random.default_rng(self.seed)

    @classmethod
    def from_dict(cls, data):
        """
        Build a config from a mapping, ignoring keys it does not know.

        Args:
            data (dict): Raw settings, typically parsed YAML.

        Returns:
            ChainConfig: The config.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {unknown}")
        return cls(**{k: v for k, v in data.items() if k in known})


def default_config_dir():
    project_root = os.path.abspath(
        os.path.join(os.path.dirname(__file__), "..", ".."))
    return os.path.join(project_root, "configs")


def load_config(environment="development", config_dir=None):
    """
    Load the chain configuration for an environment.

    Args:
        environment (str): Environment name, e.g. 'development' or 'test'
        config_dir (str, optional): Directory holding the YAML files

    Returns:
        ChainConfig: Loaded configuration, or defaults if no file is readable
    """
    config_dir = config_dir or default_config_dir()

    config_paths = [
        os.path.join(config_dir, f"chain_{environment}.yaml"),
        os.path.join(config_dir, "chain.yaml"),
    ]

    for config_path in config_paths:
        if not os.path.exists(config_path):
            continue
        try:
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Error loading chain config from {config_path}: {e}")
            continue
        if not isinstance(data, dict):
            logger.warning(f"Chain config at {config_path} is not a mapping")
            continue
        logger.info(f"Loaded chain config from {config_path}")
        return ChainConfig.from_dict(data)

    logger.info("No chain configuration found, using defaults")
    return ChainConfig()
