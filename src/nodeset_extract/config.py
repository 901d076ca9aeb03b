"""
Configuration management using Pydantic Settings.

Loads extractor settings from (highest priority first):
- keyword arguments passed to ExtractorConfig
- environment variables with the NODESET_ prefix (and a .env file)
- config/nodeset.yaml, when present
- field defaults (the OPC UA node-set element names)
"""

import logging
from pathlib import Path
from typing import Optional
import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nodeset_extract.validators import validate_local_name, validate_payload_path


_DEFAULT_CONFIG_NAME = Path('config') / 'nodeset.yaml'


def _find_config_file(explicit: Optional[str]) -> Optional[Path]:
    """Resolve the YAML config file, or None when there is nothing to load."""
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found at {path}")
        return path

    # src/nodeset_extract/config.py -> project root
    project_root = Path(__file__).parent.parent.parent
    for candidate in (project_root / _DEFAULT_CONFIG_NAME, _DEFAULT_CONFIG_NAME):
        if candidate.exists():
            return candidate
    return None


class ExtractorConfig(BaseSettings):
    """
    Settings for both extraction modes.

    Element and attribute names are matched against XML local names, so
    namespace prefixes in the source document never matter.

    Attributes:
        variable_element: Element kind searched in type dictionary mode
        datatype_element: Element kind scanned in type definition mode
        identifier_attribute: Attribute carrying the node identifier
        label_element: Child element carrying the display label
        payload_path: Slash-separated child path to the base64 payload
        csv_type_tag: Constant third column of every CSV row
        payload_chunk_size: Characters of base64 text decoded per step
        log_level: Logging level used by the CLI
        config_file: Optional explicit YAML config path

    Example:
        >>> config = ExtractorConfig(csv_type_tag='DataType')
        >>> config.datatype_element
        'UADataType'
    """

    variable_element: str = Field(
        default='UAVariable',
        description="Local name of the node kind holding the type dictionary"
    )
    datatype_element: str = Field(
        default='UADataType',
        description="Local name of the node kind listed in the CSV output"
    )
    identifier_attribute: str = Field(
        default='NodeId',
        description="Local name of the identifier attribute"
    )
    label_element: str = Field(
        default='DisplayName',
        description="Local name of the display label child element"
    )
    payload_path: str = Field(
        default='Value/ByteString',
        description="Child path (local names) of the base64 payload element"
    )
    csv_type_tag: str = Field(
        default='DataType',
        min_length=1,
        description="Unquoted constant written as the third CSV field"
    )
    payload_chunk_size: int = Field(
        default=64 * 1024,
        gt=0,
        description="Number of base64 characters decoded per step"
    )
    log_level: str = Field(
        default='INFO',
        description="Logging level name for the command-line tools"
    )
    config_file: Optional[str] = Field(
        default=None,
        description="Explicit path to a YAML config file"
    )

    model_config = SettingsConfigDict(
        env_prefix='NODESET_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    @model_validator(mode='before')
    @classmethod
    def load_yaml_config(cls, data: dict) -> dict:
        """
        Merge values from the YAML config file underneath the given data.

        Values already present (keyword arguments or environment) win over
        the file. A missing default file is not an error.
        """
        config_path = _find_config_file(data.get('config_file'))
        if config_path is None:
            return data

        with open(config_path, 'r', encoding='utf-8') as f:
            yaml_data = yaml.safe_load(f) or {}

        if not isinstance(yaml_data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

        section = yaml_data.get('extractor', {}) or {}
        known = {k: v for k, v in section.items() if k in cls.model_fields}
        return {**known, **data}

    @field_validator(
        'variable_element', 'datatype_element', 'identifier_attribute', 'label_element'
    )
    @classmethod
    def validate_local_names(cls, v: str) -> str:
        """Element and attribute names must be bare local names."""
        return validate_local_name(v)

    @field_validator('payload_path')
    @classmethod
    def validate_payload_steps(cls, v: str) -> str:
        """Every step of the payload path must be a bare local name."""
        return validate_payload_path(v)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize to an upper-case level name known to logging."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: '{v}'")
        return level

    @property
    def payload_steps(self) -> tuple:
        """payload_path split into its local-name steps."""
        return tuple(self.payload_path.split('/'))


# Singleton pattern - loaded once, cached until reset
_config: Optional[ExtractorConfig] = None


def get_config() -> ExtractorConfig:
    """
    Get global config instance (lazy-loaded singleton).

    Example:
        >>> config = get_config()
        >>> config is get_config()
        True
    """
    global _config
    if _config is None:
        _config = ExtractorConfig()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    global _config
    _config = None
