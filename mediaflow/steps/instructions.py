"""
Instruction argument schemas.

Instructions transform media. Their inputs are filenames or selectors
pointing at the outputs of earlier steps.
"""

from typing import Annotated, List, Optional, Union

from pydantic import Field

from mediaflow.steps.base import InstructionArgs
from mediaflow.validation.rules import (
    AspectRatio,
    ConditionalPresence,
    FileInputs,
    OneOf,
    Pad,
)


AUDIO_FORMATS = ["mp3", "aac", "wav", "flac"]


class SplitArgs(InstructionArgs):
    """Split a video into multiple segments.

    - Either the number of segments or the duration of each segment is given
    - If only one is given, the other is derived from the video duration
      • Input: 1 video file
      • Output: n video files
    - Arguments:
      • segmentDuration: duration of each segment, in seconds (optional)
      • nbSegments: number of segments to produce (optional)
    """
    inputs: Annotated[List[str], FileInputs(min=1, max=1, video_only=True)]
    segment_duration: Annotated[
        Optional[float],
        Field(alias="segmentDuration", gt=0),
        ConditionalPresence(include_all=["nbSegments"]),
    ] = None
    nb_segments: Annotated[
        Optional[int],
        Field(alias="nbSegments", gt=0),
        ConditionalPresence(include_all=["segmentDuration"]),
    ] = None


class ConcatArgs(InstructionArgs):
    """Join several videos end to end.

      • Input: 2 or more video files
      • Output: 1 video file
    """
    inputs: Annotated[List[str], FileInputs(min=2, video_only=True)]


class ResizeArgs(InstructionArgs):
    """Scale a video.

    At least one of width and height is required; the other one keeps the
    aspect ratio. ``pad`` fills the remaining area with black (true) or
    with the given color.
    """
    inputs: Annotated[List[str], FileInputs(min=1, max=1, video_only=True)]
    width: Annotated[Optional[int], Field(gt=0), ConditionalPresence(include_any=["height"])] = None
    height: Annotated[Optional[int], Field(gt=0), ConditionalPresence(include_any=["width"])] = None
    aspect_ratio: Annotated[Optional[str], Field(alias="aspectRatio"), AspectRatio()] = None
    pad: Annotated[Optional[Union[bool, str]], Pad()] = None


class ExtractAudioArgs(InstructionArgs):
    """Extract the audio track of a video.

      • Input: 1 video file
      • Output: 1 audio file
    """
    inputs: Annotated[List[str], FileInputs(min=1, max=1, video_only=True)]
    audio_format: Annotated[Optional[str], Field(alias="format"), OneOf(AUDIO_FORMATS)] = None


class MuteArgs(InstructionArgs):
    """Remove the audio track of every input video."""
    inputs: Annotated[List[str], FileInputs(min=1, video_only=True)]


class MergeAudioArgs(InstructionArgs):
    """Replace the audio track of a video."""
    video: Annotated[List[str], FileInputs(min=1, max=1, video_only=True)]
    audio: Annotated[List[str], FileInputs(min=1, max=1, audio_only=True)]
