"""
Configuration schema for mediaflow.

Defines the settings that shape a validation run:
- Logging level and optional log file
- Document and report formats
- Media extensions accepted by the file-input rules
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from mediaflow.utils.files import (
    DEFAULT_AUDIO_EXTENSIONS,
    DEFAULT_MAX_FILENAME_LENGTH,
    DEFAULT_VIDEO_EXTENSIONS,
)
from mediaflow.utils.logging_config import LogLevel


class DocumentFormat(Enum):
    """Supported pipeline document formats."""
    JSON = "json"
    YAML = "yaml"


class ReportFormat(Enum):
    """Supported report output formats."""
    HUMAN = "human"
    JSON = "json"


@dataclass
class MediaConfig:
    """Extensions used to classify plain input filenames."""
    video_extensions: List[str] = field(default_factory=lambda: sorted(DEFAULT_VIDEO_EXTENSIONS))
    audio_extensions: List[str] = field(default_factory=lambda: sorted(DEFAULT_AUDIO_EXTENSIONS))
    max_filename_length: int = DEFAULT_MAX_FILENAME_LENGTH


@dataclass
class ParserConfig:
    """Complete mediaflow configuration."""

    log_level: str = LogLevel.INFO.value
    log_file: Optional[str] = None
    document_format: str = DocumentFormat.JSON.value
    report_format: str = ReportFormat.HUMAN.value

    media: MediaConfig = field(default_factory=MediaConfig)

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        try:
            LogLevel(self.log_level)
        except ValueError:
            valid_levels = [l.value for l in LogLevel]
            errors.append(f"Invalid log_level '{self.log_level}'. Valid options: {valid_levels}")

        try:
            DocumentFormat(self.document_format)
        except ValueError:
            valid_formats = [f.value for f in DocumentFormat]
            errors.append(f"Invalid document_format '{self.document_format}'. Valid options: {valid_formats}")

        try:
            ReportFormat(self.report_format)
        except ValueError:
            valid_formats = [f.value for f in ReportFormat]
            errors.append(f"Invalid report_format '{self.report_format}'. Valid options: {valid_formats}")

        extensions_ok = True
        for option in ("video_extensions", "audio_extensions"):
            extensions = getattr(self.media, option)
            if not isinstance(extensions, list) or not all(isinstance(e, str) and e for e in extensions):
                errors.append(f"media.{option} must be a list of non-empty strings")
                extensions_ok = False

        if extensions_ok:
            overlap = {e.lower().lstrip('.') for e in self.media.video_extensions} & \
                {e.lower().lstrip('.') for e in self.media.audio_extensions}
            if overlap:
                errors.append(f"Extensions cannot be both video and audio: {', '.join(sorted(overlap))}")

        if not isinstance(self.media.max_filename_length, int) or self.media.max_filename_length <= 0:
            errors.append("media.max_filename_length must be a positive integer")

        return errors
