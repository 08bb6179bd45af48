"""
Environment variable integration for mediaflow.

Centralizes the environment variable names read by the configuration
manager and documents them for ``--help`` output.
"""

import os
from typing import Dict, List


class EnvironmentVariables:
    """Centralized environment variable definitions and utilities."""

    LOG_LEVEL = "MEDIAFLOW_LOG_LEVEL"
    LOG_FILE = "MEDIAFLOW_LOG_FILE"
    DOCUMENT_FORMAT = "MEDIAFLOW_DOCUMENT_FORMAT"
    REPORT_FORMAT = "MEDIAFLOW_REPORT_FORMAT"

    @classmethod
    def get_all_variables(cls) -> List[str]:
        """Get list of all supported environment variables."""
        return [
            cls.LOG_LEVEL,
            cls.LOG_FILE,
            cls.DOCUMENT_FORMAT,
            cls.REPORT_FORMAT,
        ]

    @classmethod
    def get_variable_documentation(cls) -> Dict[str, str]:
        """Get documentation for all environment variables."""
        return {
            cls.LOG_LEVEL: "Default logging level (debug, info, warning, error)",
            cls.LOG_FILE: "Optional log file path (rotated at 10MB)",
            cls.DOCUMENT_FORMAT: "Default pipeline document format (json, yaml)",
            cls.REPORT_FORMAT: "Default report output format (human, json)",
        }

    @classmethod
    def get_current_values(cls) -> Dict[str, str]:
        """Get the variables currently set in the environment."""
        return {name: os.environ[name] for name in cls.get_all_variables() if name in os.environ}
