"""
Configuration Loader for Wage Catalog Services

This module loads and validates the catalog configuration from wage_catalog.yml.
Environment variables (usually from a .env file) override the file paths so
the same config can be used locally and in the orchestrator.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

VALID_LABEL_STRATEGIES = {'first', 'most_common', 'statewide'}

# Environment variables that override the build paths
ENV_DATA_DIR = 'WAGE_DATA_DIR'
ENV_OUTPUT_DIR = 'WAGE_OUTPUT_DIR'
ENV_DATA_DATE = 'WAGE_DATA_DATE'
ENV_CONFIG_PATH = 'WAGE_CONFIG_PATH'


@dataclass
class BuildSettings:
    """Settings for the batch build (normalizer + aggregator)."""

    data_dir: str = 'data/raw'
    output_dir: str = 'data/catalog'
    data_date: str = '2024-05'
    header_row: int = 5
    label_strategy: str = 'first'
    wage_records_file: str = 'wage-records.json'
    occupations_file: str = 'occupations.json'

    def validate(self) -> None:
        """Validate build settings."""
        if self.header_row < 0:
            raise ValueError(f"header_row must be >= 0, got {self.header_row}")
        if self.label_strategy not in VALID_LABEL_STRATEGIES:
            raise ValueError(
                f"label_strategy must be one of {sorted(VALID_LABEL_STRATEGIES)}, "
                f"got {self.label_strategy!r}"
            )

    @property
    def wage_records_path(self) -> Path:
        return Path(self.output_dir) / self.wage_records_file

    @property
    def occupations_path(self) -> Path:
        return Path(self.output_dir) / self.occupations_file


@dataclass
class QuerySettings:
    """Defaults for catalog queries."""

    default_page_size: int = 25

    def validate(self) -> None:
        if self.default_page_size < 1:
            raise ValueError(f"default_page_size must be >= 1, got {self.default_page_size}")


@dataclass
class NegotiationSettings:
    """Labels used by the salary negotiation calculator."""

    state_name: str = 'Pennsylvania'
    state_abbreviation: str = 'PA'


@dataclass
class CatalogConfig:
    """Complete catalog configuration."""

    build: BuildSettings = field(default_factory=BuildSettings)
    query: QuerySettings = field(default_factory=QuerySettings)
    negotiation: NegotiationSettings = field(default_factory=NegotiationSettings)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "CatalogConfig":
        """Create CatalogConfig from dictionary."""
        defaults = BuildSettings()
        build_dict = config_dict.get('build', {}) or {}
        build = BuildSettings(
            data_dir=str(build_dict.get('data_dir', defaults.data_dir)),
            output_dir=str(build_dict.get('output_dir', defaults.output_dir)),
            data_date=str(build_dict.get('data_date', defaults.data_date)),
            header_row=int(build_dict.get('header_row', defaults.header_row)),
            label_strategy=build_dict.get('label_strategy', defaults.label_strategy),
            wage_records_file=build_dict.get('wage_records_file', defaults.wage_records_file),
            occupations_file=build_dict.get('occupations_file', defaults.occupations_file),
        )
        build.validate()

        query_dict = config_dict.get('query', {}) or {}
        query = QuerySettings(
            default_page_size=int(query_dict.get('default_page_size', 25)),
        )
        query.validate()

        negotiation_dict = config_dict.get('negotiation', {}) or {}
        negotiation = NegotiationSettings(
            state_name=negotiation_dict.get('state_name', 'Pennsylvania'),
            state_abbreviation=negotiation_dict.get('state_abbreviation', 'PA'),
        )

        return cls(build=build, query=query, negotiation=negotiation)

    def apply_env_overrides(self, environ: Optional[dict[str, str]] = None) -> "CatalogConfig":
        """
        Override build paths from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            self, for chaining
        """
        env = os.environ if environ is None else environ

        if env.get(ENV_DATA_DIR):
            self.build.data_dir = env[ENV_DATA_DIR]
        if env.get(ENV_OUTPUT_DIR):
            self.build.output_dir = env[ENV_OUTPUT_DIR]
        if env.get(ENV_DATA_DATE):
            self.build.data_date = env[ENV_DATA_DATE]

        return self


def default_config_path() -> Path:
    """Default config location relative to the project root."""
    project_root = Path(__file__).parent.parent.parent
    return project_root / "config" / "wage_catalog.yml"


def load_catalog_config(config_path: Optional[str] = None) -> CatalogConfig:
    """
    Load catalog configuration from YAML file.

    Args:
        config_path: Path to wage_catalog.yml. If None, uses WAGE_CONFIG_PATH
                     or the default location.

    Returns:
        CatalogConfig with build, query and negotiation settings

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid

    Example:
        >>> config = load_catalog_config('config/wage_catalog.yml')
        >>> print(config.build.header_row)
        5
    """
    if config_path is None:
        config_path = os.getenv(ENV_CONFIG_PATH) or str(default_config_path())

    logger.info("Loading catalog configuration", extra={'config_path': config_path})

    try:
        with open(config_path) as f:
            config_dict = yaml.safe_load(f)

        if not config_dict:
            logger.warning("Empty configuration file, using defaults")
            config_dict = {}

        config = CatalogConfig.from_dict(config_dict)

        logger.info(
            "Catalog configuration loaded successfully",
            extra={
                'data_dir': config.build.data_dir,
                'output_dir': config.build.output_dir,
                'data_date': config.build.data_date,
                'label_strategy': config.build.label_strategy,
            }
        )

        return config

    except FileNotFoundError:
        logger.error(f"Configuration file not found: {config_path}")
        raise
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML: {e}")
        raise ValueError(f"Invalid YAML in config file: {e}") from e
    except ValueError:
        raise
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise ValueError(f"Failed to load configuration: {e}") from e
