"""
Filename and extension predicates.

Pure string checks used by the file-input rules. Nothing here touches the
filesystem: whether a file actually exists is the executor's concern.
"""

import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Callable, FrozenSet, Iterable, Optional


DEFAULT_VIDEO_EXTENSIONS = frozenset([
    'mp4', 'mkv', 'mov', 'avi', 'webm', 'flv', 'wmv', 'm4v', 'mpeg', 'mpg', 'ts'
])
DEFAULT_AUDIO_EXTENSIONS = frozenset([
    'mp3', 'wav', 'flac', 'm4a', 'ogg', 'wma', 'aac', 'opus', 'amr'
])
DEFAULT_MAX_FILENAME_LENGTH = 255

# Characters rejected by at least one common filesystem
_FORBIDDEN_CHARS = re.compile(r'[<>:"|?*\x00-\x1f]')
_RESERVED_NAMES = {
    'con', 'prn', 'aux', 'nul',
    *(f'com{i}' for i in range(1, 10)),
    *(f'lpt{i}' for i in range(1, 10)),
}


def get_extension(filename: str) -> str:
    """Return the lowercase extension of a filename without the dot."""
    return PurePath(filename).suffix.lower().lstrip('.')


def is_valid_filename(filename: str, max_length: int = DEFAULT_MAX_FILENAME_LENGTH) -> bool:
    """Check that a string can be used as a file path."""
    if not isinstance(filename, str) or not filename.strip():
        return False
    if _FORBIDDEN_CHARS.search(filename):
        return False

    name = PurePath(filename).name
    if not name or name in ('.', '..') or len(name) > max_length:
        return False
    if name.split('.')[0].lower() in _RESERVED_NAMES:
        return False
    if name.endswith(' ') or name.endswith('.'):
        return False
    return True


def has_extension(filename: str, extensions: Iterable[str]) -> bool:
    """Check whether a filename ends with one of the given extensions."""
    return get_extension(filename) in {e.lower().lstrip('.') for e in extensions}


def has_video_extension(filename: str) -> bool:
    return has_extension(filename, DEFAULT_VIDEO_EXTENSIONS)


def has_audio_extension(filename: str) -> bool:
    return has_extension(filename, DEFAULT_AUDIO_EXTENSIONS)


@dataclass(frozen=True)
class MediaPredicates:
    """Filename predicates handed to the field rules.

    Callers may swap any of them, e.g. to accept extra container formats.
    """
    video_extensions: FrozenSet[str] = DEFAULT_VIDEO_EXTENSIONS
    audio_extensions: FrozenSet[str] = DEFAULT_AUDIO_EXTENSIONS
    max_filename_length: int = DEFAULT_MAX_FILENAME_LENGTH
    filename_check: Optional[Callable[[str], bool]] = field(default=None, compare=False)

    def is_valid_filename(self, filename: str) -> bool:
        if self.filename_check is not None:
            return self.filename_check(filename)
        return is_valid_filename(filename, self.max_filename_length)

    def is_video(self, filename: str) -> bool:
        return has_extension(filename, self.video_extensions)

    def is_audio(self, filename: str) -> bool:
        return has_extension(filename, self.audio_extensions)

    @classmethod
    def from_config(cls, media_config) -> "MediaPredicates":
        """Build predicates from a MediaConfig section."""
        return cls(
            video_extensions=frozenset(e.lower().lstrip('.') for e in media_config.video_extensions),
            audio_extensions=frozenset(e.lower().lstrip('.') for e in media_config.audio_extensions),
            max_filename_length=media_config.max_filename_length,
        )
