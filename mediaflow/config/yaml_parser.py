"""
YAML reader for mediaflow configuration files.

Reads a configuration file into a plain mapping and checks it against the
known keys. Syntax errors carry the file, line and column they occurred at.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml


class YAMLParsingError(Exception):
    """A configuration file could not be read as a YAML mapping."""

    def __init__(self, message: str, file_path: Optional[Path] = None,
                 line_number: Optional[int] = None, column: Optional[int] = None):
        self.file_path = file_path
        self.line_number = line_number
        self.column = column

        location = []
        if file_path:
            location.append(f"File: {file_path}")
        if line_number is not None:
            location.append(f"Line {line_number}" + (f", Column {column}" if column is not None else ""))
        super().__init__(" | ".join([message] + location))

    @classmethod
    def from_yaml_error(cls, error: yaml.YAMLError, file_path: Optional[Path] = None) -> "YAMLParsingError":
        mark = getattr(error, "problem_mark", None)
        problem = getattr(error, "problem", None) or str(error)
        # marks are 0-based
        line, column = (mark.line + 1, mark.column + 1) if mark else (None, None)
        return cls(f"YAML parsing error: {problem}", file_path, line, column)


# key -> expected type, or a nested schema for sections
CONFIG_SCHEMA: Dict[str, Any] = {
    "log_level": str,
    "log_file": str,
    "document_format": str,
    "report_format": str,
    "media": {
        "video_extensions": list,
        "audio_extensions": list,
        "max_filename_length": int,
    },
}

_TYPE_NAMES = {str: "a string", list: "a list", int: "an integer"}


class ConfigurationYAMLParser:
    """Reads and structurally checks configuration files."""

    def __init__(self, schema: Optional[Dict[str, Any]] = None):
        self.schema = schema if schema is not None else CONFIG_SCHEMA

    def parse_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Read a configuration file.

        Raises:
            YAMLParsingError: If the file is missing, unreadable or not a YAML mapping
        """
        try:
            text = Path(file_path).read_text(encoding="utf-8")
        except FileNotFoundError:
            raise YAMLParsingError("Configuration file not found", file_path)
        except PermissionError:
            raise YAMLParsingError("Permission denied reading configuration file", file_path)
        except UnicodeDecodeError as e:
            raise YAMLParsingError(f"File encoding error: {e}", file_path)
        return self._load(text, file_path)

    def parse_string(self, yaml_content: str) -> Dict[str, Any]:
        """Read configuration from a string."""
        return self._load(yaml_content, None)

    def _load(self, text: str, file_path: Optional[Path]) -> Dict[str, Any]:
        try:
            content = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise YAMLParsingError.from_yaml_error(e, file_path) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise YAMLParsingError("Configuration root must be a mapping", file_path)
        return content

    def validate_configuration_structure(self, config_dict: Dict[str, Any]) -> List[str]:
        """
        Check keys and value types against the schema.

        Returns:
            List of validation errors (empty if valid)
        """
        return self._check_section(config_dict, self.schema, prefix="")

    def _check_section(self, section: Dict[str, Any], schema: Dict[str, Any], prefix: str) -> List[str]:
        errors = []
        label = prefix.rstrip(".")

        unknown = set(section) - set(schema)
        if unknown:
            kind = f"{label} keys" if label else "configuration keys"
            errors.append(f"Unknown {kind}: {', '.join(sorted(map(str, unknown)))}")

        for key, expected in schema.items():
            if key not in section or section[key] is None:
                continue
            value = section[key]
            if isinstance(expected, dict):
                if not isinstance(value, dict):
                    errors.append(f"{prefix}{key} must be a dictionary")
                else:
                    errors.extend(self._check_section(value, expected, f"{prefix}{key}."))
            elif not isinstance(value, expected) or isinstance(value, bool):
                errors.append(f"{prefix}{key} must be {_TYPE_NAMES[expected]}")
        return errors

    def validate_and_parse_file(self, file_path: Path) -> Tuple[Dict[str, Any], List[str]]:
        """
        Read a configuration file and check its structure.

        Returns:
            Tuple of (parsed_config, validation_errors)
        """
        config_dict = self.parse_file(file_path)
        return config_dict, self.validate_configuration_structure(config_dict)
