"""
Configuration management for mediaflow.

Layered YAML configuration with environment variable overrides and
``${VAR}`` substitution.
"""

from .environment import EnvironmentVariables
from .manager import ConfigurationManager
from .schema import DocumentFormat, MediaConfig, ParserConfig, ReportFormat
from .yaml_parser import ConfigurationYAMLParser, YAMLParsingError

__all__ = [
    "ConfigurationManager",
    "ConfigurationYAMLParser",
    "DocumentFormat",
    "EnvironmentVariables",
    "MediaConfig",
    "ParserConfig",
    "ReportFormat",
    "YAMLParsingError",
]
