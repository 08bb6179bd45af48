"""
Configuration Manager for mediaflow.

Builds a ParserConfig from layered sources, lowest precedence first:
- Built-in defaults
- User configuration (~/.mediaflow/config.yaml)
- Project configuration (./.mediaflow/config.yaml)
- Explicit configuration (--config file.yaml)
- MEDIAFLOW_* environment variables
- CLI arguments
"""

import logging
import os
import re
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple

from mediaflow.errors import ConfigurationError
from .environment import EnvironmentVariables
from .schema import MediaConfig, ParserConfig
from .yaml_parser import ConfigurationYAMLParser, YAMLParsingError


logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".mediaflow"
CONFIG_FILENAME = "config.yaml"

_ENV_REFERENCE = re.compile(r'\$\{([^}]+)\}')

# environment variable -> (config key, normalizer)
_ENV_SETTINGS = {
    EnvironmentVariables.LOG_LEVEL: ("log_level", str.lower),
    EnvironmentVariables.LOG_FILE: ("log_file", str),
    EnvironmentVariables.DOCUMENT_FORMAT: ("document_format", str.lower),
    EnvironmentVariables.REPORT_FORMAT: ("report_format", str.lower),
}


def _expand(match: "re.Match") -> str:
    name, has_default, default = match.group(1).partition(":-")
    if name in os.environ:
        return os.environ[name]
    if has_default:
        return default
    raise ConfigurationError(f"Required environment variable '{name}' is not set")


def substitute_environment_variables(value: Any) -> Any:
    """
    Replace ``${VAR}`` and ``${VAR:-default}`` in every string of a config tree.

    Raises:
        ConfigurationError: If a referenced variable without default is unset
    """
    if isinstance(value, dict):
        return {key: substitute_environment_variables(item) for key, item in value.items()}
    if isinstance(value, list):
        return [substitute_environment_variables(item) for item in value]
    if isinstance(value, str):
        return _ENV_REFERENCE.sub(_expand, value)
    return value


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigurationManager:
    """Resolves the effective configuration for a validation run."""

    def __init__(self, user_config_path: Optional[Path] = None, project_config_path: Optional[Path] = None):
        self.user_config_path = user_config_path or Path.home() / CONFIG_DIRNAME / CONFIG_FILENAME
        self.project_config_path = project_config_path or Path.cwd() / CONFIG_DIRNAME / CONFIG_FILENAME
        self.yaml_parser = ConfigurationYAMLParser()

    def load_configuration(self,
                           config_file: Optional[str] = None,
                           cli_overrides: Optional[Dict[str, Any]] = None) -> ParserConfig:
        """
        Merge every configuration source and validate the result.

        Args:
            config_file: Explicit configuration file (must exist)
            cli_overrides: Values given on the command line; None values are ignored

        Raises:
            ConfigurationError: If a file is unreadable or a value is invalid
        """
        config_dict: Dict[str, Any] = {}
        for source, layer in self._layers(config_file, cli_overrides or {}):
            if layer:
                logger.debug(f"Applying configuration from {source}: {sorted(layer)}")
            config_dict = merge_configs(config_dict, layer)

        config = self._dict_to_config(substitute_environment_variables(config_dict))
        self.validate_configuration(config)
        return config

    def validate_configuration(self, config: ParserConfig) -> None:
        """Raise ConfigurationError listing every invalid value."""
        errors = config.validate()
        if errors:
            raise ConfigurationError(
                "Invalid configuration:\n" + "\n".join(f"  - {error}" for error in errors),
                errors,
            )

    def _layers(self, config_file: Optional[str], cli_overrides: Dict[str, Any]) -> Iterator[Tuple[str, Dict[str, Any]]]:
        yield "defaults", asdict(ParserConfig())
        for path in (self.user_config_path, self.project_config_path):
            if path.exists():
                yield str(path), self._load_yaml_file(path)
        if config_file:
            yield config_file, self._load_yaml_file(Path(config_file))
        yield "environment", self._load_environment_variables()
        yield "command line", {key: value for key, value in cli_overrides.items() if value is not None}

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        try:
            config_dict, problems = self.yaml_parser.validate_and_parse_file(file_path)
        except YAMLParsingError as e:
            raise ConfigurationError(str(e)) from e

        if problems:
            raise ConfigurationError(
                f"Configuration validation errors in {file_path}:\n" +
                "\n".join(f"  - {problem}" for problem in problems),
                problems,
            )
        return config_dict

    def _load_environment_variables(self) -> Dict[str, Any]:
        return {
            key: normalize(os.environ[name])
            for name, (key, normalize) in _ENV_SETTINGS.items()
            if name in os.environ
        }

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> ParserConfig:
        defaults = ParserConfig()
        return ParserConfig(
            log_level=config_dict.get("log_level", defaults.log_level),
            log_file=config_dict.get("log_file"),
            document_format=config_dict.get("document_format", defaults.document_format),
            report_format=config_dict.get("report_format", defaults.report_format),
            media=MediaConfig(**(config_dict.get("media") or {})),
        )
